import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Find .env file in project root (parent of api/, core/, etc.)
project_root = Path(__file__).parent
load_dotenv(project_root / '.env')

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# Vision model used to read the label and produce the analysis JSON
VISION_MODEL = os.getenv("VISION_MODEL", "gpt-4o")
VISION_TEMPERATURE = float(os.getenv("VISION_TEMPERATURE", "0.0"))
VISION_MAX_TOKENS = int(os.getenv("VISION_MAX_TOKENS", "8192"))

# Model used for follow-up questions about an analyzed product
CHAT_MODEL = os.getenv("CHAT_MODEL", "gpt-4o")

# Wall-clock budget for a single upstream call (seconds)
UPSTREAM_TIMEOUT_SECONDS = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Largest label image accepted by the upload route (bytes)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
