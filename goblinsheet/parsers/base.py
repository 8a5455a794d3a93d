"""
Base class for feature parsers.

A feature parser turns one Open5e source record into an ordered list of
Features. Parsers are pure: the same record always yields the same list.

Malformed source text is handled in one of two ways:

- hardened (default): a ParseError is recorded, only the offending feature
  is skipped and the rest of the document is still parsed
- strict: FeatureParseError is raised on the first problem
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from goblinsheet.config.logging import get_logger
from goblinsheet.features.base import Feature, FeatureParseError, ParseError
from goblinsheet.sources.models import SourceRecord

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SourceRecord)


def split_paragraphs(text: str) -> list[str]:
    """Split markdown text on blank lines."""
    return text.split("\n\n")


class FeatureParser(ABC, Generic[RecordT]):
    """
    Abstract base class for feature parsers.

    Subclasses set ``kind`` (the ``<kind>`` part of every emitted
    ``source_slug``) and implement ``_parse``, reporting malformed text
    through ``_fail``.

    Example:
        >>> parser = ClassParser()
        >>> features, errors = parser.parse_with_errors(barbarian)
        >>> [f.name for f in features][:2]
        ['Rage', 'Unarmored Defense']
    """

    kind: str = ""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def source_slug(self, record: RecordT) -> str:
        return f"{self.kind}:{record.slug}"

    def parse(self, record: RecordT) -> list[Feature]:
        """
        Parse a record into features, logging any skipped features.

        Raises:
            FeatureParseError: In strict mode, on malformed source text
        """
        features, errors = self.parse_with_errors(record)
        for error in errors:
            logger.warning(f"Skipped feature in {error.source_slug}: {error.reason}")
        return features

    def parse_with_errors(self, record: RecordT) -> tuple[list[Feature], list[ParseError]]:
        """
        Parse a record into features.

        Returns:
            Tuple of (features in source order, errors for skipped features)

        Raises:
            FeatureParseError: In strict mode, on malformed source text
        """
        errors: list[ParseError] = []
        features = self._parse(record, errors)
        logger.debug(
            f"Parsed {len(features)} features from {self.source_slug(record)}"
            + (f" ({len(errors)} skipped)" if errors else "")
        )
        return features, errors

    def _fail(self, record: RecordT, reason: str, errors: list[ParseError]) -> None:
        """Record a parse failure, or raise it in strict mode."""
        error = ParseError(source_slug=self.source_slug(record), reason=reason)
        if self.strict:
            raise FeatureParseError(error)
        errors.append(error)

    @abstractmethod
    def _parse(self, record: RecordT, errors: list[ParseError]) -> list[Feature]:
        """
        Parse ``record``, appending to ``errors`` for every skipped feature.

        Args:
            record: Source record to parse
            errors: Sink for ParseErrors (use ``_fail``)

        Returns:
            Features in source order
        """
        pass
