"""
gedcom_parser.py - GEDCOM parsing into an AncestryGraph.

Defines the GedcomParser class, which reads individual (INDI) and family (FAM)
records with ged4py, links children to their parents and returns an
AncestryGraph.

Lines are checked before they reach ged4py: blank lines, lines that do not
follow the GEDCOM line grammar and lines nested too deeply for their place are
dropped. Parsing never raises on malformed content: records that cannot be used
are dropped and reported as ParseIssue entries on the returned graph.

Module: ace_gedcom.gedcom_parser
"""

import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from ged4py.model import Record
from ged4py.parser import GedcomReader, IntegrityError, ParserError

from .ancestry import AncestryGraph, DEFAULT_GENERATION_CAP
from .gedcom_date import extract_year
from .person import Person, extract_surnames

logger = logging.getLogger(__name__)

EVENT_TAGS = ('BIRT', 'DEAT', 'MARR')
PARTNER_TAGS = ('HUSB', 'WIFE')


@dataclass(frozen=True)
class ParseIssue:
    """A recoverable problem found while parsing."""
    issue_type: str
    severity: Literal["info", "warning"]
    message: str
    record_id: Optional[str] = None


@dataclass
class GedcomEvent:
    year: Optional[int] = None
    place: Optional[str] = None


@dataclass
class IndividualRecord:
    """Mutable INDI record, frozen into a Person after linking."""
    xref_id: str
    name: str = ''
    birth: Optional[GedcomEvent] = None
    death: Optional[GedcomEvent] = None
    marriage: Optional[GedcomEvent] = None
    parent_ids: List[str] = field(default_factory=list)

    def to_person(self) -> Person:
        return Person(
            xref_id=self.xref_id,
            name=self.name,
            birth_year=self.birth.year if self.birth else None,
            death_year=self.death.year if self.death else None,
            surnames=tuple(extract_surnames(self.name)),
            birth_place=self.birth.place if self.birth else None,
            death_place=self.death.place if self.death else None,
            marriage_place=self.marriage.place if self.marriage else None,
            parent_ids=tuple(self.parent_ids),
        )


@dataclass
class FamilyUnion:
    """FAM record: partners and children, used only to link parents."""
    xref_id: Optional[str]
    husband_id: Optional[str] = None
    wife_id: Optional[str] = None
    child_ids: List[str] = field(default_factory=list)
    marriage_place: Optional[str] = None


class GedcomParser:
    """
    Parses GEDCOM text into an AncestryGraph.

    Attributes:
        generation_cap (int): Generation cap handed to the AncestryGraph.
    """
    __slots__ = ['generation_cap']

    LINE_RE = re.compile(
        r'^(\d+)\s+(?:@([A-Za-z0-9][^@\s]*)@\s+)?([A-Za-z0-9_]+)(?:\s(.*))?$'
    )  # allow optional @xref@ before the tag
    LEVEL_RE = re.compile(r'^(\d+)\s')
    XREF_RE = re.compile(r'@([^@]+)@')
    SPACE_RE = re.compile(r'\s+')

    def __init__(self, generation_cap: int = DEFAULT_GENERATION_CAP) -> None:
        """
        Initialize GedcomParser.

        Args:
            generation_cap (int): Number of generations in each ancestor closure.
        """
        self.generation_cap = generation_cap

    def parse_file(self, gedcom_file: Union[str, Path]) -> AncestryGraph:
        """
        Parse a GEDCOM file.

        Args:
            gedcom_file (Union[str, Path]): Path to GEDCOM file.

        Returns:
            AncestryGraph: Graph of the people in the file.
        """
        return self.parse(read_text_file(Path(gedcom_file)))

    def parse(self, text: str) -> AncestryGraph:
        """
        Parse GEDCOM text.

        Args:
            text (str): Full GEDCOM content.

        Returns:
            AncestryGraph: Graph of the people found, possibly empty.
        """
        issues: List[ParseIssue] = []
        individuals: Dict[str, IndividualRecord] = {}
        unions: List[FamilyUnion] = []

        lines = self.clean_lines(text, issues)
        if lines:
            self._read_records(lines, individuals, unions, issues)
        self._link_unions(individuals, unions, issues)

        people = [individual.to_person() for individual in individuals.values()]
        logger.info(f"Parsed {len(people)} people and {len(unions)} families ({len(issues)} issues)")
        return AncestryGraph(people, generation_cap=self.generation_cap, issues=issues)

    def clean_lines(self, text: str, issues: List[ParseIssue]) -> List[str]:
        """
        Rewrite text as GEDCOM lines ged4py can read.

        Blank lines are skipped. Malformed lines, and lines more than one level
        below the previous kept line, are skipped with a 'malformed_line' issue.
        Kept lines are rebuilt with single spaces and upper-case tags, and a
        trailer is added when the text has none.

        Args:
            text (str): Raw GEDCOM content.
            issues (List[ParseIssue]): Issues list to append to.

        Returns:
            List[str]: Cleaned lines, empty if no line was kept.
        """
        lines = []
        previous_level = -1
        for line_num, raw in enumerate(text.splitlines(), start=1):
            line = raw.lstrip('\ufeff').strip()
            if not line:
                continue
            m = self.LINE_RE.match(line)
            if not m:
                self._add_issue(issues, 'malformed_line', f"Line {line_num} skipped: '{line}'", severity='info')
                level_m = self.LEVEL_RE.match(line)
                if level_m:
                    # lines nested under a skipped line are skipped too
                    previous_level = min(previous_level, int(level_m.group(1)) - 1)
                continue
            level_s, xref_id, tag, value = m.groups()
            level = int(level_s)
            if level > previous_level + 1:
                self._add_issue(issues, 'malformed_line', f"Line {line_num} skipped, level {level} after level {previous_level}: '{line}'", severity='info')
                continue
            previous_level = level
            tag = tag.upper()
            value = (value or '').strip()
            if level == 1 and tag == 'CHAR':
                value = 'UTF-8'  # the cleaned text is handed to ged4py as UTF-8
            parts = [str(level), f'@{xref_id}@' if xref_id else '', tag, value]
            lines.append(' '.join(part for part in parts if part))
        if lines and not lines[-1].startswith('0 TRLR'):
            lines.append('0 TRLR')
        return lines

    def _read_records(self, lines: List[str], individuals: Dict[str, IndividualRecord],
                      unions: List[FamilyUnion], issues: List[ParseIssue]) -> None:
        """Read INDI and FAM records with ged4py; a ged4py error ends reading with a 'parse_error' issue."""
        data = io.BytesIO(('\n'.join(lines) + '\n').encode('utf-8'))
        try:
            with GedcomReader(data, encoding='utf-8') as g:
                for record in g.records0('INDI'):
                    individual = self._read_individual(record, issues)
                    if individual is None:
                        continue
                    if individual.xref_id in individuals:
                        self._add_issue(issues, 'duplicate_id', f"Repeated individual ID '{individual.xref_id}' ignored", individual.xref_id)
                        continue
                    individuals[individual.xref_id] = individual
                for record in g.records0('FAM'):
                    unions.append(self._read_union(record))
        except (ParserError, IntegrityError) as e:
            self._add_issue(issues, 'parse_error', f"GEDCOM reading stopped after {len(individuals)} people: {e}")

    def _read_individual(self, record: Record, issues: List[ParseIssue]) -> Optional[IndividualRecord]:
        """
        Read an INDI record.

        Returns:
            Optional[IndividualRecord]: The record, or None if it has no ID or no name.
        """
        individual = IndividualRecord(xref_id=self._xref_value(record.xref_id) or '')

        for sub_record in record.sub_records:
            if sub_record.tag == 'NAME':
                if not individual.name:
                    individual.name = self._clean_name(sub_record.value)
            elif sub_record.tag in EVENT_TAGS:
                event = self._read_event(sub_record)
                if sub_record.tag == 'BIRT' and individual.birth is None:
                    individual.birth = event
                elif sub_record.tag == 'DEAT' and individual.death is None:
                    individual.death = event
                elif sub_record.tag == 'MARR' and individual.marriage is None:
                    individual.marriage = event

        if not individual.xref_id:
            self._add_issue(issues, 'missing_id', f"Individual '{individual.name}' without ID dropped")
            return None
        if not individual.name:
            self._add_issue(issues, 'missing_name', f"Individual '{individual.xref_id}' without name dropped", individual.xref_id)
            return None
        return individual

    def _read_union(self, record: Record) -> FamilyUnion:
        """Read a FAM record; partner and child pointers are kept as raw xref IDs."""
        union = FamilyUnion(xref_id=self._xref_value(record.xref_id))

        for sub_record in record.sub_records:
            if sub_record.tag in PARTNER_TAGS or sub_record.tag == 'CHIL':
                ref_id = self._xref_value(sub_record.value)
                if not ref_id:
                    logger.debug(f"Family '{union.xref_id}' {sub_record.tag} without reference ignored")
                    continue
                if sub_record.tag == 'CHIL':
                    union.child_ids.append(ref_id)
                elif sub_record.tag == 'HUSB' and union.husband_id is None:
                    union.husband_id = ref_id
                elif sub_record.tag == 'WIFE' and union.wife_id is None:
                    union.wife_id = ref_id
                else:
                    logger.warning(f"Family record {union.xref_id} has an unexpected extra {sub_record.tag} '{ref_id}'")
            elif sub_record.tag == 'MARR':
                event = self._read_event(sub_record)
                if union.marriage_place is None:
                    union.marriage_place = event.place
        return union

    def _read_event(self, record: Record) -> GedcomEvent:
        """Read the first DATE and PLAC of an event record."""
        event = GedcomEvent()
        for sub_record in record.sub_records:
            if sub_record.tag == 'DATE' and event.year is None:
                event.year = extract_year(sub_record.value)
            elif sub_record.tag == 'PLAC' and event.place is None:
                event.place = (sub_record.value or '').strip() or None
        return event

    def _link_unions(self, individuals: Dict[str, IndividualRecord], unions: List[FamilyUnion], issues: List[ParseIssue]) -> None:
        """
        Add each union's known partners to the parent IDs of its known children.
        """
        for union in unions:
            partner_ids = []
            for partner_id in (union.husband_id, union.wife_id):
                if partner_id is None:
                    continue
                if partner_id in individuals:
                    partner_ids.append(partner_id)
                else:
                    self._add_issue(issues, 'unresolved_reference', f"Family '{union.xref_id}' partner '{partner_id}' not found", union.xref_id)

            for child_id in union.child_ids:
                child = individuals.get(child_id)
                if child is None:
                    self._add_issue(issues, 'unresolved_reference', f"Family '{union.xref_id}' child '{child_id}' not found", union.xref_id)
                    continue
                child.parent_ids.extend(partner_ids)

            if union.marriage_place:
                for partner_id in partner_ids:
                    partner = individuals[partner_id]
                    if partner.marriage is None:
                        partner.marriage = GedcomEvent(place=union.marriage_place)
                    elif partner.marriage.place is None:
                        partner.marriage.place = union.marriage_place

    def _clean_name(self, value: Union[tuple, str, None]) -> str:
        """
        Join a ged4py NAME value into a display name.

        ged4py splits 'John /Smith/ Jr' into ('John', 'Smith', 'Jr'); the parts are
        joined with single spaces. Plain strings have their slashes removed.
        """
        if not value:
            return ''
        if isinstance(value, tuple):
            value = ' '.join(part for part in value if part)
        return self.SPACE_RE.sub(' ', value.replace('/', ' ')).strip()

    def _xref_value(self, value: Optional[str]) -> Optional[str]:
        if not isinstance(value, str):
            return None
        m = self.XREF_RE.search(value)
        return m.group(1) if m else None

    @staticmethod
    def _add_issue(issues: List[ParseIssue], issue_type: str, message: str, record_id: Optional[str] = None,
                   severity: Literal["info", "warning"] = 'warning') -> None:
        issue = ParseIssue(issue_type=issue_type, severity=severity, message=message, record_id=record_id)
        issues.append(issue)
        if severity == 'warning':
            logger.warning(message)
        else:
            logger.debug(message)


def read_text_file(path: Path, encodings: tuple = ('utf-8-sig', 'latin-1')) -> str:
    """
    Read a whole text file, trying each encoding in order.

    Args:
        path (Path): File to read.
        encodings (tuple): Encodings to try.

    Returns:
        str: File content.
    """
    for enc in encodings:
        try:
            with open(path, 'r', encoding=enc) as f:
                return f.read()
        except UnicodeDecodeError:
            logger.debug(f"Could not decode '{path}' as {enc}, trying next encoding")
            continue
    raise ValueError(f"Could not decode file '{path}' with any known encoding")
