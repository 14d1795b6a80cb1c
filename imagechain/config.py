import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

RANDOM_SEED = int(os.getenv("RANDOM_SEED", "42"))

# Remote loading
HTTP_USER_AGENT = os.getenv("HTTP_USER_AGENT", "Mozilla/5.0")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Text drawing
DEFAULT_FONT_PATH = os.getenv("DEFAULT_FONT_PATH") or None
DEFAULT_FONT_SIZE = int(os.getenv("DEFAULT_FONT_SIZE", "16"))

# Batch processing
VALID_IMAGE_EXTENSIONS = {
    ext.strip().lower()
    for ext in os.getenv("VALID_IMAGE_EXTENSIONS", ".png,.jpg,.jpeg,.bmp,.gif,.webp").split(",")
    if ext.strip()
}
OUTPUT_IMG_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
