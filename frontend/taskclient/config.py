import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

API_BASE_URL = os.getenv("TASK_API_URL", "http://localhost:3001/api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
