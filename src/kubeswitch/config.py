"""Configuration for kubeswitch"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Minimal configuration"""

    # Logging
    DEBUG = os.getenv("KUBESWITCH_DEBUG", "false").lower() == "true"
    LOG_FILE = os.getenv("KUBESWITCH_LOG_FILE", "")

    @classmethod
    def log_file_path(cls):
        return Path(cls.LOG_FILE).expanduser() if cls.LOG_FILE else None

config = Config()
