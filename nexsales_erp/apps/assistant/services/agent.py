import logging

from django.conf import settings
from django.utils import timezone as tz
from openai import OpenAI, OpenAIError

from ..errors import UpstreamUnavailable
from .action_executor import ActionExecutor
from .business_context import BUSINESS_CONTEXT
from .command_parser import CommandParser
from .response_formatter import GENERIC_FAILURE, AssistantResponse, ResponseFormatter
from .store_context import StoreContextBuilder

logger = logging.getLogger(__name__)

UPSTREAM_APOLOGY = "Sorry, I encountered an error communicating with the AI service."
EMPTY_REPLY = "No response generated."


def build_client():
    if not settings.OPENAI_API_KEY:
        raise UpstreamUnavailable("API key not configured")
    return OpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.OPENAI_TIMEOUT)


class AssistantAgent:
    """
    One chat turn: ask the model, parse its reply into an action, run the
    action against the store and render the result. The store is only
    touched after the model has answered.
    """

    def __init__(self, store, client=None):
        self.store = store
        self.client = client
        self.context_builder = StoreContextBuilder(store)
        self.parser = CommandParser()
        self.executor = ActionExecutor(store)
        self.formatter = ResponseFormatter(store.config)

    def _get_client(self):
        if self.client is None:
            self.client = build_client()
        return self.client

    def _get_datetime_context(self):
        now_local = tz.localtime(tz.now())
        return """
CURRENT DATE & TIME (auto-injected from server):
- Today's date : {today}
- Current time : {now}
- Timezone     : {tz}
""".format(
            today=now_local.strftime('%Y-%m-%d'),
            now=now_local.strftime('%Y-%m-%d %H:%M:%S'),
            tz=str(now_local.tzinfo),
        )

    def _build_system_prompt(self):
        return """You are an intelligent ERP assistant for {company}.

Current System Data:
{data}
{datetime_context}
{context}""".format(
            company=self.store.config.name,
            data=self.context_builder.get_context(),
            datetime_context=self._get_datetime_context(),
            context=BUSINESS_CONTEXT,
        )

    def ask(self, user_text):
        """Raw reply text from the model. Raises ``UpstreamUnavailable``."""
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=settings.OPENAI_MODEL,
                messages=[
                    {"role": "system", "content": self._build_system_prompt()},
                    {"role": "user", "content": user_text},
                ],
                temperature=0,
                max_tokens=1024,
            )
        except OpenAIError as e:
            raise UpstreamUnavailable(str(e)) from e

        if not response.choices:
            return EMPTY_REPLY
        return response.choices[0].message.content or EMPTY_REPLY

    def run(self, user_text):
        logger.info("━" * 60)
        logger.info("USER MESSAGE : %s", user_text)
        logger.info("━" * 60)

        try:
            raw = self.ask(user_text)
            logger.info("── STEP 1: Assistant replied ──")
            logger.debug("%s", raw)

            action = self.parser.parse(raw)
            logger.info("── STEP 2: Parsed as %s ──", action.kind)

            result = self.executor.execute(action)
            if result.success:
                logger.info("── STEP 3: Executed in %dms ──", result.execution_time_ms)
            else:
                logger.warning("── STEP 3: EXECUTION FAILED — %s", result.error)

            response = self.formatter.format(action, result)

        except UpstreamUnavailable as e:
            logger.error("Assistant unavailable: %s", e.reason)
            return AssistantResponse(text=UPSTREAM_APOLOGY, action=None, success=False)

        except Exception as e:
            logger.exception("Agent error: %s", str(e))
            return AssistantResponse(
                text=GENERIC_FAILURE,
                action=None,
                success=False,
            )

        logger.info("── STEP 4: FINAL RESPONSE ──")
        logger.info("%s", response.text)
        logger.info("━" * 60)
        return response
