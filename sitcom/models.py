"""Core data models shared across sitcom components."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass
class Heading:
    """One entry of a document's flat heading outline."""

    level: int
    title: str
    id: Optional[str] = None


@dataclass
class AssetEntry:
    """A locally referenced asset awaiting relocation.

    ``source`` starts as the resolved path of the reference and is rewritten from
    ``.md`` to ``.html`` when the asset is itself compiled (``is_marked``).
    ``via`` and ``target`` are filled in during relocation.
    """

    source: str
    token: str = ""
    pattern: Optional["re.Pattern[str]"] = field(default=None, repr=False)
    via: Optional[str] = None
    target: Optional[str] = None
    is_master: bool = False
    is_marked: bool = False


class AssetStatus(str, Enum):
    """Outcome of materializing a single asset."""

    OK = "ok"
    NOT_FOUND = "not found"
    OUTSIDE_ROOT = "not in working directory"
    FAILED = "failed"


@dataclass
class AssetReport:
    """Advisory result for one asset copy."""

    entry: AssetEntry
    status: AssetStatus
    detail: str = ""
