"""Configuration loader"""

import os
from typing import Optional, Tuple

from dotenv import load_dotenv

from ..models.analysis_models import AnalysisConfig


class ConfigLoader:
    """Loader for application configuration"""

    @staticmethod
    def load_config() -> Tuple[AnalysisConfig, str]:
        """Load configuration from environment

        Returns:
            Tuple containing:
            - AnalysisConfig object
            - Gemini API key

        Raises:
            ValueError: If required configuration is missing or malformed
        """
        load_dotenv()

        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY not found in environment variables")

        temperature: Optional[float] = None
        if os.getenv("TEMPERATURE"):
            temperature = float(os.getenv("TEMPERATURE"))

        config = AnalysisConfig(
            model_name=os.getenv("MODEL_NAME", "gemini-2.5-flash"),
            temperature=temperature,
            evaluation_timeout=float(os.getenv("EVALUATION_TIMEOUT", "60")),
            search_timeout=float(os.getenv("SEARCH_TIMEOUT", "90")),
            translation_timeout=float(os.getenv("TRANSLATION_TIMEOUT", "60")),
        )

        return config, api_key
