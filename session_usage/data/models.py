"""Data models for session usage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, NonNegativeInt
from pydantic.alias_generators import to_camel

from session_usage.utils.formatting import format_k_tokens, relative_age
from session_usage.utils.numbers import round_half_up

FALLBACK_MODEL = "claude-opus-4-5"
FALLBACK_CONTEXT_TOKENS = 200_000


class SessionRecord(BaseModel):
    """One persisted entry of the session store. Every field may be missing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    session_id: Optional[str] = None
    updated_at: Optional[float] = None  # epoch millis
    system_sent: Optional[bool] = None
    aborted_last_run: Optional[bool] = None
    thinking_level: Optional[str] = None
    verbose_level: Optional[str] = None
    input_tokens: Optional[NonNegativeInt] = None
    output_tokens: Optional[NonNegativeInt] = None
    total_tokens: Optional[NonNegativeInt] = None
    model: Optional[str] = None
    context_tokens: Optional[NonNegativeInt] = None


class SessionKind(str, Enum):
    """Conversation bucket a session key belongs to."""

    DIRECT = "direct"
    GROUP = "group"
    GLOBAL = "global"
    UNKNOWN = "unknown"

    @classmethod
    def from_key(cls, key: str) -> "SessionKind":
        if key == "global":
            return cls.GLOBAL
        if key.startswith("group:"):
            return cls.GROUP
        if key == "unknown":
            return cls.UNKNOWN
        return cls.DIRECT

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class UsageSnapshot:
    """The last usage object seen in a session transcript."""

    input: int = 0
    output: int = 0
    cache_read: int = 0
    cache_write: int = 0
    total_tokens: Optional[int] = None

    @property
    def prompt_tokens(self) -> Optional[int]:
        """Input plus cache tokens, or total minus output when those are absent."""
        prompt = self.input + self.cache_read + self.cache_write
        if prompt > 0:
            return prompt
        if self.total_tokens is not None and self.total_tokens > self.output:
            return self.total_tokens - self.output
        return None


@dataclass(frozen=True)
class TokenStats:
    """Token counters for one session, resolved against defaults."""

    input: int
    output: int
    total: int
    context_tokens: int

    @property
    def context_summary_short(self) -> str:
        return f"{format_k_tokens(self.total)}/{format_k_tokens(self.context_tokens)}"

    @property
    def fraction_used(self) -> float:
        if self.context_tokens <= 0:
            return 0.0
        return min(1.0, max(0.0, self.total / self.context_tokens))

    @property
    def percent_used(self) -> Optional[int]:
        if self.context_tokens <= 0 or self.total <= 0:
            return None
        return min(100, round_half_up(self.total / self.context_tokens * 100))

    @property
    def summary(self) -> str:
        text = f"in {self.input} | out {self.output} | total {self.total}"
        percent = self.percent_used
        if percent is not None:
            text += f" ({percent}% of {self.context_tokens})"
        return text


@dataclass(frozen=True)
class SessionDefaults:
    """Values applied when a record omits its model or context window."""

    model: str = FALLBACK_MODEL
    context_tokens: int = FALLBACK_CONTEXT_TOKENS


@dataclass
class UsageSummary:
    """A display-ready view of one session store entry."""

    key: str
    kind: SessionKind
    updated_at: Optional[datetime]
    session_id: Optional[str]
    thinking_level: Optional[str]
    verbose_level: Optional[str]
    system_sent: bool
    aborted_last_run: bool
    tokens: TokenStats
    model: Optional[str]

    @property
    def age_text(self) -> str:
        return relative_age(self.updated_at)

    @property
    def flag_labels(self) -> List[str]:
        flags: List[str] = []
        if self.thinking_level:
            flags.append(f"think {self.thinking_level}")
        if self.verbose_level:
            flags.append(f"verbose {self.verbose_level}")
        if self.system_sent:
            flags.append("system sent")
        if self.aborted_last_run:
            flags.append("aborted")
        return flags


@dataclass
class SessionView:
    """Summaries together with where they were loaded from."""

    store_path: Path
    defaults: SessionDefaults
    summaries: List[UsageSummary] = field(default_factory=list)
    loaded_at: Optional[datetime] = None
