import logging
from langchain_groq import ChatGroq
from langchain_ollama import ChatOllama
from langchain_anthropic import ChatAnthropic
from langchain_core.output_parsers import StrOutputParser
from backend.config import settings
from backend.prompt import build_prompt
from backend.schemas import TimetableRequest

logger = logging.getLogger(__name__)


class TimetableGenerationError(RuntimeError):
    """Raised when the language model call fails"""


def get_scheduler():
    """Factory function to return the appropriate scheduler based on config"""
    provider = settings.ai_provider.lower()
    if provider == "claude":
        return ClaudeScheduler()
    if provider == "ollama":
        return OllamaScheduler()
    if provider == "groq":
        return GroqScheduler()
    raise ValueError(f"Unknown AI_PROVIDER '{settings.ai_provider}'. Use groq, ollama or claude")


class BaseScheduler:
    """Base class for AI-powered timetable generation"""

    model_name = None

    def __init__(self):
        self.llm = None
        self.parser = StrOutputParser()

    def generate_timetable(self, request: TimetableRequest) -> str:
        """
        Generate a study timetable as markdown text.

        One call to the model; the raw text is returned untouched.

        Args:
            request: Validated timetable request

        Returns:
            The model's markdown response
        """
        prompt = build_prompt(request)
        logger.debug("Prompt for %s:\n%s", self.__class__.__name__, prompt)

        chain = self.llm | self.parser
        try:
            text = chain.invoke(prompt)
        except Exception as e:
            raise TimetableGenerationError(f"{self.__class__.__name__} failed: {e}") from e

        logger.info(
            "Generated timetable with %s (%d characters, class %s, %s)",
            self.model_name, len(text), request.class_level, request.target_exam
        )
        return text


class GroqScheduler(BaseScheduler):
    """Scheduler using the hosted Groq API"""

    def __init__(self):
        super().__init__()
        if not settings.groq_api_key:
            raise ValueError("GROQ_API_KEY not set in environment variables")

        self.model_name = settings.groq_model
        self.llm = ChatGroq(
            model=settings.groq_model,
            api_key=settings.groq_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            max_retries=0
        )


class OllamaScheduler(BaseScheduler):
    """Scheduler using local Ollama for development"""

    def __init__(self):
        super().__init__()
        self.model_name = settings.ollama_model
        self.llm = ChatOllama(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=settings.llm_temperature,
            num_predict=settings.llm_max_tokens
        )


class ClaudeScheduler(BaseScheduler):
    """Scheduler using Claude API"""

    def __init__(self):
        super().__init__()
        if not settings.claude_api_key:
            raise ValueError("CLAUDE_API_KEY not set in environment variables")

        self.model_name = settings.claude_model
        self.llm = ChatAnthropic(
            model=settings.claude_model,
            api_key=settings.claude_api_key,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            max_retries=0
        )
