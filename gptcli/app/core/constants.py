"""Model ids, command tokens and fixed texts."""

DEFAULT_MODEL = "gpt-3.5-turbo"
GPT4_MODEL = "gpt-4"
GPT4_VISION_MODEL = "gpt-4-vision-preview"
DALLE_MODEL = "dall-e-3"

CMD_GPT4 = "4"
CMD_VISION = "v"
CMD_DALLE = "d"

HELP_FLAGS = frozenset({"-h", "-help", "--help"})

SYSTEM_PREAMBLE = "You are a helpful assistant."
DEFAULT_VISION_INSTRUCTIONS = "What's in the image?"
VISION_MAX_TOKENS = 300
VISION_MEDIA_TYPE = "image/jpeg"
NO_VISION_CONTENT = "No content in response"

DALLE_IMAGE_COUNT = 1
DALLE_SIZE = "1792x1024"
DALLE_QUALITY = "hd"
