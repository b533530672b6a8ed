from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Annotated, Any, Dict, Optional, Type
import logging

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from ..config import Settings, settings as default_settings
from . import date_math
from .calendar import BusinessCalendar
from .errors import InvalidDateError

logger = logging.getLogger(__name__)

CountryCode = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=2, max_length=2, pattern=r"^[A-Za-z]{2}$"),
    AfterValidator(str.upper),
]
DateString = Annotated[str, StringConstraints(pattern=r"^\d{4}-\d{2}-\d{2}$")]

# Years a paid entrypoint may ask the holiday provider about
MIN_YEAR = 2000
MAX_YEAR = 2100


def parse_bounded_date(value: str) -> date:
    """Parse a YYYY-MM-DD string whose year must lie in [MIN_YEAR, MAX_YEAR]."""
    parsed = date_math.parse_date(value)
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        raise InvalidDateError(value, f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    return parsed


class EntrypointInput(BaseModel):
    """Base for entrypoint inputs: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class EmptyInput(EntrypointInput):
    pass


@dataclass
class AgentContext:
    """Collaborators handed to every entrypoint invocation."""

    holiday_provider: Any
    events_provider: Any = None
    settings: Settings = field(default_factory=lambda: default_settings)
    clock: date_math.Clock = date_math.utc_now

    @property
    def calendar(self) -> BusinessCalendar:
        return BusinessCalendar(self.holiday_provider)

    async def aclose(self) -> None:
        for provider in (self.holiday_provider, self.events_provider):
            if provider is not None:
                await provider.aclose()


class BaseEntrypoint(ABC):
    key: str = ""
    description: Optional[str] = None
    price: int = 0
    input_model: Type[EntrypointInput] = EmptyInput

    def __init__(self, context: AgentContext):
        self.context = context
        self.calendar = context.calendar

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def now(self) -> datetime:
        now = self.context.clock()
        # Naive clocks are taken to be UTC already
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc)

    def today(self) -> date:
        return date_math.utc_today(self.context.clock)

    def timestamp(self) -> str:
        return self.now().isoformat().replace("+00:00", "Z")

    def parse_input(self, payload: Optional[Dict[str, Any]]) -> EntrypointInput:
        return self.input_model.model_validate(payload or {})

    @abstractmethod
    async def handle(self, params: EntrypointInput) -> Dict[str, Any]:
        pass

    async def invoke(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = self.parse_input(payload)
        logger.info(f"Invoking {self.key} ({self.name}) with {params.model_dump(by_alias=True)}")
        return await self.handle(params)
