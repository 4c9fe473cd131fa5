from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class DataTable:
    """Table attached to a single step, row 0 holds the headings"""
    rows: Tuple[Tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class Step:
    """One instruction line; only ``text`` is rewritten by substitution"""
    keyword: str
    text: str
    step_type: str = "given"
    docstring: Optional[str] = None
    docstring_content_type: Optional[str] = None
    table: Optional[DataTable] = None


@dataclass(frozen=True)
class ExampleTable:
    """Examples grid of a scenario, row 0 holds the column titles"""
    rows: Tuple[Tuple[str, ...], ...] = ()
    name: str = ""
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Scenario:
    name: str
    tags: Tuple[str, ...] = ()
    steps: Tuple[Step, ...] = ()
    examples: Tuple[ExampleTable, ...] = ()
    keyword: str = "Scenario"


@dataclass(frozen=True)
class Background:
    steps: Tuple[Step, ...] = ()


@dataclass(frozen=True)
class Feature:
    """A parsed feature document"""
    name: str
    keyword: str = "Feature"
    tags: Tuple[str, ...] = ()
    description: Tuple[str, ...] = ()
    background: Optional[Background] = None
    scenarios: Tuple[Scenario, ...] = ()
    filename: Optional[str] = None
    language: Optional[str] = None
