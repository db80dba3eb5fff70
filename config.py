"""Configuration module for ScholarScribe"""
import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# API Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")

# Azure OpenAI Configuration
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_AI_ENDPOINT")
AZURE_OPENAI_API_KEY = os.getenv("AZURE_AI_CREDENTIAL")
AZURE_OPENAI_DEPLOYMENT = os.getenv("AZURE_OPENAI_DEPLOYMENT")
AZURE_OPENAI_API_VERSION = os.getenv("AZURE_MODEL_VERSION", "2024-12-01-preview")

# Supabase (PostgREST) document library
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
SUPABASE_TABLE = os.getenv("SUPABASE_TABLE", "documents")
SUPABASE_TIMEOUT = 15  # seconds

# Local auto-save snapshot
DRAFT_DB_PATH = os.getenv("DRAFT_DB_PATH", "scholarscribe_draft.db")

# Generation
OUTLINE_TEMPERATURE = 0.3
REWRITE_TEMPERATURE = 0.8
REVIEW_TEMPERATURE = 0.4
PREVIOUS_CONTEXT_CHARS = int(os.getenv("PREVIOUS_CONTEXT_CHARS", "500"))
DEFAULT_WRITING_TOKENS = 8000

# Application Configuration
APP_TITLE = "ScholarScribe"
APP_DESCRIPTION = "Academic writing assistant"
UI_LANGUAGE = os.getenv("UI_LANGUAGE", "en")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
