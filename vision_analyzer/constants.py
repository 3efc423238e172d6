"""All magic values live here — no inline literals anywhere else."""

# Gemini endpoint. The API key travels as the `key` query parameter.
GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1/models/"
    "gemini-2.5-flash:generateContent"
)
GEMINI_ANALYZER_NAME = "Gemini Vision API"
GEMINI_KEY_PARAM = "key"

# Other vision backends
CLAUDE_VISION_MODEL = "claude-opus-4-6"
CLAUDE_ANALYZER_NAME = "Claude Vision API"
CLAUDE_DEFAULT_MAX_TOKENS = 1024
OPENAI_VISION_MODEL = "gpt-4o"
OPENAI_ANALYZER_NAME = "OpenAI Vision API"

# HTTP
JSON_CONTENT_TYPE = "application/json"
HTTP_TIMEOUT_SECONDS: float = 60.0

# MIME resolution
DEFAULT_MIME_TYPE = "application/octet-stream"
MIME_TYPES_BY_EXTENSION: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
}

# Markdown fences stripped before structured extraction
JSON_FENCE = "```json"
FENCE = "```"
ESCAPED_QUOTE = '\\"'

# Error descriptions
MSG_INVALID_IMAGE_DATA = "The provided image data is invalid or corrupted."
MSG_UNSUPPORTED_FORMAT = "Unsupported image format: {format}"
MSG_NETWORK_ERROR = "Network error: {cause}"
MSG_API_ERROR = "API error ({status_code}): {message}"
MSG_AUTH_ERROR = "Authentication error: {message}"
MSG_PARSING_ERROR = "Failed to parse response: {message}"
MSG_UNKNOWN_ERROR = "Unknown error: {cause}"

MSG_UNKNOWN_API_ERROR = "Unknown API error"
MSG_INVALID_JSON_RESPONSE = "Invalid JSON response"
MSG_NO_CANDIDATE_TEXT = "Could not extract text from Gemini response"
MSG_NO_CONTENT_TEXT = "Could not extract text from %s response"

# Log messages
MSG_ANALYSIS_START = "Analyzing %s image (%d bytes) with %s"
MSG_ANALYSIS_DONE = "✓ %s analysis finished (%.2fs)"
MSG_ANALYSIS_API_ERROR = "✗ %s rejected request (%s): %s"
MSG_REMOTE_FETCH = "Fetching remote image %s"
MSG_REMOTE_FETCH_STATUS = "Remote image %s returned status %d"
MSG_NO_STRUCTURED_DATA = "Response is not a JSON object, skipping structured data"

# Default analysis prompt
DEFAULT_PROMPT = (
    "Describe this image in detail, including objects, colors, composition, and mood."
)
DEFAULT_TEMPERATURE: float = 0.7

# Thumbnail preset: short structured caption, compact key set
THUMBNAIL_MAX_TOKENS = 1000
THUMBNAIL_TEMPERATURE: float = 0.7
THUMBNAIL_PROMPT = (
    "Analyze this video thumbnail and generate a highly accurate AI prompt that only "
    "describes the visual style, color palette, mood, composition, lighting, subject "
    "appearance, and artistic influences. Do not include or mention any text, title, "
    "watermark, symbols, UI elements, or lettering found in the image. Return a single "
    "valid JSON object only. JSON keys required: style, colors, subject, lighting, "
    "layout, final_prompt.\n"
    "\n"
    "For the 'layout' key, explicitly describe the **shot type** (e.g., Extreme "
    "Close-up, Wide Shot), **camera angle** (e.g., Low Angle, High Angle), and "
    "**depth of field** (e.g., Shallow DoF/Bokeh, Deep DoF)\n"
    "\n"
    'Example: {"style":"cinematic realistic","colors":"warm neon palette",'
    '"subject":"female character with pink hair and futuristic jacket",'
    '"lighting":"glow neon rim light","layout":"tight close-up portrait composition",'
    '"final_prompt":"cinematic sci-fi portrait, glowing neon lighting, ultra detailed '
    'skin texture, cyberpunk atmosphere, 8k rendering"}'
)

# Detailed preset: exhaustive description, large key set
DETAILED_MAX_TOKENS = 4096
DETAILED_TEMPERATURE: float = 0.4
DETAILED_PROMPT = (
    "Analyze this image exhaustively. Return a single valid JSON object only. "
    "JSON keys required: summary, objects, people, setting, colors, composition, "
    "lighting, mood, text_content, style, notable_details.\n"
    "\n"
    "'objects' and 'notable_details' are arrays of strings. 'people' is an array of "
    "objects with 'description' and 'position' keys (empty array if nobody is "
    "visible). 'text_content' transcribes any visible text verbatim (empty string if "
    "there is none). Every other key is a descriptive string."
)

# Entry point
PRESET_DEFAULT = "default"
PRESET_THUMBNAIL = "thumbnail"
PRESET_DETAILED = "detailed"
BACKEND_GEMINI = "gemini"
BACKEND_CLAUDE = "claude"
BACKEND_OPENAI = "openai"
REMOTE_URL_PREFIXES = ("http://", "https://")
MSG_ANALYZER_STARTING = "Starting image analysis…"
MSG_BACKEND_NOT_CONFIGURED = "%s backend selected but its API key is not set"
