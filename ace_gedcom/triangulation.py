"""
triangulation.py - DNA triangulation table parsing.

Defines the TriangulationMatch record and the TriangulationParser class, which
reads a comma- or tab-delimited table of shared DNA segments (one row per match)
into TriangulationMatch entries.

Recognized columns (case-insensitive):
    Match Name, Source File, Start Position, End Position, Size (cM), SNPs,
    Y-Haplogroup, mtDNA, Surnames

Unrecognized columns are ignored. Rows without a match name or with a segment
size of 0 are dropped. A table that yields no valid match at all is an error.

Module: ace_gedcom.triangulation
"""

import csv
import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .gedcom_parser import read_text_file

logger = logging.getLogger(__name__)

SURNAME_SPLIT_RE = re.compile(r'[,;|]')
NUMBER_PREFIX_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
INTEGER_PREFIX_RE = re.compile(r'^[+-]?\d+')


class EmptyTriangulationInput(ValueError):
    """Raised when a triangulation table contains no valid matches."""

    def __init__(self, message: str = "No valid triangulation matches found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class TriangulationMatch:
    """
    A DNA segment shared with one match.

    Attributes:
        match_name (str): Name of the DNA match.
        source_file (str): File or kit the row came from.
        start_position (float): Segment start (genomic coordinate).
        end_position (float): Segment end (genomic coordinate).
        size_cm (float): Segment length in centimorgans.
        snps (int): Number of SNPs in the segment.
        y_haplogroup (Optional[str]): Y-DNA haplogroup of the match.
        mtdna (Optional[str]): mtDNA haplogroup of the match.
        surnames (Tuple[str, ...]): Ancestral surnames listed for the match.
    """
    match_name: str
    source_file: str = ''
    start_position: float = 0.0
    end_position: float = 0.0
    size_cm: float = 0.0
    snps: int = 0
    y_haplogroup: Optional[str] = None
    mtdna: Optional[str] = None
    surnames: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to a plain dictionary."""
        return {
            'matchName': self.match_name,
            'sourceFile': self.source_file,
            'startPosition': self.start_position,
            'endPosition': self.end_position,
            'sizeCM': self.size_cm,
            'snps': self.snps,
            'yHaplogroup': self.y_haplogroup,
            'mtDNA': self.mtdna,
            'surnames': list(self.surnames),
        }


def parse_float(value: str) -> float:
    """Leading number of a value, e.g. '45.2 cM' -> 45.2; 0.0 when there is none."""
    m = NUMBER_PREFIX_RE.match(value.strip())
    if not m:
        return 0.0
    number = float(m.group(0))
    return number if math.isfinite(number) else 0.0


def parse_int(value: str) -> int:
    """Leading integer of a value, e.g. '1,234' -> 1; 0 when there is none."""
    m = INTEGER_PREFIX_RE.match(value.strip())
    return int(m.group(0)) if m else 0


def split_surnames(value: str) -> Tuple[str, ...]:
    """Split a multi-value surname field on ',', ';' or '|'."""
    return tuple(s.strip() for s in SURNAME_SPLIT_RE.split(value) if s.strip())


def table_delimiter(header_line: str) -> str:
    """Tab if the header line contains one, otherwise comma."""
    return '\t' if '\t' in header_line else ','


def split_delimited_line(line: str, delimiter: Optional[str] = None) -> List[str]:
    """
    Split one line with the csv module, honouring double quotes.

    '"Smith, John",12' -> ['Smith, John', '12']. The delimiter is taken from
    the line itself when not given.
    """
    reader = csv.reader([line], dialect='excel', delimiter=delimiter or table_delimiter(line))
    return next(reader, [])


class MatchRowBuilder:
    """
    Builds a TriangulationMatch from the recognized columns of one row.

    Only the columns in COLUMNS are read; missing columns keep the
    TriangulationMatch defaults.
    """
    COLUMNS: Dict[str, str] = {
        'match name': 'match_name',
        'source file': 'source_file',
        'start position': 'start_position',
        'end position': 'end_position',
        'size (cm)': 'size_cm',
        'snps': 'snps',
        'y-haplogroup': 'y_haplogroup',
        'mtdna': 'mtdna',
        'surnames': 'surnames',
    }
    FLOAT_FIELDS = ('start_position', 'end_position', 'size_cm')

    __slots__ = ['_fields']

    def __init__(self) -> None:
        self._fields: Dict[str, object] = {}

    @classmethod
    def field_for_header(cls, header: str) -> Optional[str]:
        """Return the match field for a header name, or None if not recognized."""
        return cls.COLUMNS.get(header.strip().lower())

    def set(self, field_name: str, raw_value: str) -> None:
        value = raw_value.strip()
        if field_name in self.FLOAT_FIELDS:
            self._fields[field_name] = parse_float(value)
        elif field_name == 'snps':
            self._fields[field_name] = parse_int(value)
        elif field_name == 'surnames':
            self._fields[field_name] = split_surnames(value)
        elif field_name in ('y_haplogroup', 'mtdna'):
            self._fields[field_name] = value or None
        else:
            self._fields[field_name] = value

    def build(self) -> Optional[TriangulationMatch]:
        """
        Build the match.

        Returns:
            Optional[TriangulationMatch]: The match, or None if it has no name or no size.
        """
        match_name = self._fields.get('match_name', '')
        size_cm = self._fields.get('size_cm', 0.0)
        if not match_name or size_cm <= 0:
            return None
        return TriangulationMatch(**self._fields)


class TriangulationParser:
    """
    Parses triangulation tables into TriangulationMatch lists.
    """

    def parse_file(self, triangulation_file: Union[str, Path]) -> List[TriangulationMatch]:
        """
        Parse a triangulation table file.

        Args:
            triangulation_file (Union[str, Path]): Path to the CSV/TSV file.

        Returns:
            List[TriangulationMatch]: Valid matches in file order.

        Raises:
            EmptyTriangulationInput: If no valid match is found.
        """
        return self.parse(read_text_file(Path(triangulation_file)))

    def parse(self, text: str) -> List[TriangulationMatch]:
        """
        Parse triangulation table text.

        Args:
            text (str): Table content; the first non-blank line is the header.

        Returns:
            List[TriangulationMatch]: Valid matches in row order.

        Raises:
            EmptyTriangulationInput: If no valid match is found.
        """
        lines = [line.strip() for line in text.lstrip('\ufeff').splitlines()]
        lines = [line for line in lines if line]
        if not lines:
            raise EmptyTriangulationInput()

        csv_reader = csv.reader(lines, dialect='excel', delimiter=table_delimiter(lines[0]))
        headers = [h.strip() for h in next(csv_reader)]
        columns = [(index, MatchRowBuilder.field_for_header(header)) for index, header in enumerate(headers)]
        ignored = [header for (_, field_name), header in zip(columns, headers) if field_name is None]
        if ignored:
            logger.debug(f"Ignoring unrecognized triangulation columns: {ignored}")
        columns = [(index, field_name) for index, field_name in columns if field_name]

        matches: List[TriangulationMatch] = []
        dropped = 0
        try:
            for row_num, values in enumerate(csv_reader, start=2):
                if len(values) < len(headers):
                    logger.debug(f"Triangulation row {row_num} has {len(values)} values for {len(headers)} columns, skipped")
                    dropped += 1
                    continue
                builder = MatchRowBuilder()
                for index, field_name in columns:
                    builder.set(field_name, values[index])
                match = builder.build()
                if match is None:
                    dropped += 1
                    continue
                matches.append(match)
        except csv.Error as e:
            logger.error(f"CSV error reading triangulation table after {len(matches)} matches: {e}")

        if dropped:
            logger.info(f"Dropped {dropped} triangulation rows without match name or segment size")
        if not matches:
            raise EmptyTriangulationInput()
        logger.info(f"Parsed {len(matches)} triangulation matches")
        return matches
