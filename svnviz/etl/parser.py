"""
svn XML log parser for svnviz.

Turns the output of `svn log --xml` into Commit records.
Any malformed entry aborts the whole parse.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional

from svnviz.errors import ValidationError
from svnviz.etl.validator import validate_entry, validate_revision
from svnviz.models.entities import Commit
from svnviz.utils.timestamps import parse_timestamp


def _child_text(element: ET.Element, tag: str) -> Optional[str]:
    """Text of a direct child; '' for an empty element, None if missing."""
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ''


def parse_logentry(element: ET.Element) -> Commit:
    """
    Convert a single <logentry> element to a Commit.

    Raises:
        ValidationError: If revision, author or date are missing or malformed
    """
    revision_str = element.get('revision')
    check = validate_revision(revision_str)
    if not check:
        raise ValidationError(check.reason)

    revision = int(revision_str)
    author = _child_text(element, 'author')
    date_str = _child_text(element, 'date')

    check = validate_entry(author, date_str)
    if not check:
        raise ValidationError(check.reason, revision=revision)

    return Commit(
        revision=revision,
        author=author.strip(),
        timestamp=parse_timestamp(date_str),
        message=_child_text(element, 'msg') or '',
    )


def parse_commits(xml_log: str) -> List[Commit]:
    """
    Parse svn XML log output into commits, in log order.

    Args:
        xml_log: Raw stdout of `svn log --xml`

    Returns:
        List of Commit records (empty for a blank log)

    Raises:
        ValidationError: On malformed XML or any invalid entry
    """
    if not xml_log or not xml_log.strip():
        return []

    try:
        root = ET.fromstring(xml_log)
    except ET.ParseError as e:
        raise ValidationError(f"Malformed svn XML log: {e}")

    return [parse_logentry(entry) for entry in root.iter('logentry')]
