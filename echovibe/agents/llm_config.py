"""
LLM provider configuration with fallback support.

This module manages the chat models used for mood analysis and itinerary
generation (Google Gemini, OpenAI, and optionally AWS Bedrock) with automatic
fallback when the preferred provider fails.
"""

from langchain_aws import ChatBedrock
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from typing import Any, Dict, List, Optional, Tuple
import logging
import boto3

from echovibe.utils.config import Settings, settings
from echovibe.utils.exceptions import ConfigurationError, LLMError

logger = logging.getLogger(__name__)

PROVIDER_ORDER = ("gemini", "openai", "bedrock")


class LLMProvider:
    """
    Manages LLM providers with fallback logic.

    Preferred: settings.llm_provider (Gemini by default)
    Fallback: the next provider in PROVIDER_ORDER that has credentials
    """

    def __init__(self, config: Optional[Settings] = None):
        """Initialize LLM providers."""
        self.config = config or settings
        self.models: Dict[str, Any] = {}
        self._initialize_models()

    def _initialize_models(self):
        """Initialize every provider that has credentials configured."""
        cfg = self.config

        if cfg.gemini_api_key:
            try:
                self.models["gemini"] = ChatGoogleGenerativeAI(
                    model=cfg.gemini_model,
                    google_api_key=cfg.gemini_api_key,
                    temperature=cfg.llm_temperature,
                    response_mime_type="application/json",
                    timeout=cfg.request_timeout,
                )
                logger.info(f"Initialized Gemini model {cfg.gemini_model}")
            except Exception as e:
                logger.warning(f"Failed to initialize Gemini: {e}")
        else:
            logger.warning("GEMINI_API_KEY not found, Gemini unavailable")

        if cfg.openai_api_key:
            try:
                self.models["openai"] = ChatOpenAI(
                    model=cfg.openai_model,
                    temperature=cfg.llm_temperature,
                    api_key=cfg.openai_api_key,
                    timeout=cfg.request_timeout,
                )
                logger.info(f"Initialized OpenAI model {cfg.openai_model}")
            except Exception as e:
                logger.warning(f"Failed to initialize OpenAI: {e}")

        if cfg.bedrock_model_id:
            try:
                bedrock_kwargs: Dict[str, Any] = {
                    "model_id": cfg.bedrock_model_id,
                    "region_name": cfg.aws_region,
                    "model_kwargs": {"temperature": cfg.llm_temperature},
                }
                # Support for AWS SSO profiles (multiple AWS accounts)
                if cfg.aws_profile:
                    session = boto3.Session(profile_name=cfg.aws_profile)
                    bedrock_kwargs["client"] = session.client(
                        service_name="bedrock-runtime",
                        region_name=cfg.aws_region
                    )
                    logger.info(f"Using AWS profile: {cfg.aws_profile} in region: {cfg.aws_region}")
                self.models["bedrock"] = ChatBedrock(**bedrock_kwargs)
                logger.info(f"Initialized AWS Bedrock model {cfg.bedrock_model_id}")
            except Exception as e:
                logger.warning(f"Failed to initialize Bedrock: {e}")

    def provider_order(self) -> List[str]:
        """Available provider names, preferred provider first."""
        preferred = (self.config.llm_provider or "").lower()
        names = [preferred] + [p for p in PROVIDER_ORDER if p != preferred]
        return [name for name in names if name in self.models]

    def get_model(self) -> Tuple[str, Any]:
        """
        Get the preferred available model.

        Returns:
            Tuple of (provider name, chat model)

        Raises:
            ConfigurationError: If no LLM provider is available
        """
        order = self.provider_order()
        if not order:
            raise ConfigurationError(
                "No LLM provider available",
                context={"preferred": self.config.llm_provider}
            )
        name = order[0]
        if name != (self.config.llm_provider or "").lower():
            logger.info(f"{self.config.llm_provider} unavailable, using {name}")
        return name, self.models[name]

    def invoke_with_fallback(self, messages, **kwargs) -> Any:
        """
        Invoke LLM with automatic fallback on error.

        Tries the preferred provider first; if it raises, the next available
        provider gets one attempt.

        Args:
            messages: List of messages to send to the LLM
            **kwargs: Additional arguments to pass to the model

        Returns:
            LLM response message

        Raises:
            ConfigurationError: If no provider is configured
            LLMError: If every available provider failed
        """
        name, model = self.get_model()
        try:
            return model.invoke(messages, **kwargs)
        except Exception as e:
            logger.error(f"Primary LLM ({name}) failed: {e}")
            remaining = self.provider_order()[1:]
            if not remaining:
                raise LLMError(f"LLM call failed: {e}", context={"provider": name}) from e

            fallback_name = remaining[0]
            logger.warning(f"Switching to {fallback_name} fallback")
            try:
                response = self.models[fallback_name].invoke(messages, **kwargs)
                logger.info(f"Successfully used {fallback_name} fallback")
                return response
            except Exception as fallback_error:
                logger.error(f"Fallback LLM ({fallback_name}) also failed: {fallback_error}")
                raise LLMError(
                    f"LLM call failed: {fallback_error}",
                    context={"provider": name, "fallback": fallback_name}
                ) from fallback_error


# Global instance
llm_provider = LLMProvider()
