"""
Word Data Models

Payloads returned by the external word services.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Definition:
    """Child-friendly explanation of a word."""
    word: str
    definicao_curta: str
    exemplos: List[str] = field(default_factory=list)
    sinonimos: List[str] = field(default_factory=list)
    observacoes: Optional[str] = None


@dataclass
class ThemeWord:
    """Word picked from an AI-generated themed list."""
    word: str
    allWords: List[str]
    theme: str
