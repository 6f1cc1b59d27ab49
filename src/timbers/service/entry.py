# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from enum import StrEnum
from typing import Optional

import pendulum

from timbers.errors import GitError, NoCommitsError, UserError, ValidationError
from timbers.model.commit import Commit, CommitGroup, Diffstat, empty_diffstat
from timbers.model.entry import Entry, Summary, SummaryFields, WorkItem
from timbers.model.entry_id import generate_entry_id
from timbers.service.group import is_work_item_key
from timbers.source.commit_source import CommitSource
from timbers.template.entry import get_entry_template
from timbers.time import now_utc

logger = logging.getLogger(__name__)

MINOR_CHANGE = "Minor change"
AUTO_DOCUMENTED = "Auto-documented"


class EntryMode(StrEnum):
    MANUAL = "manual"
    MINOR = "minor"
    AUTO = "auto"


def build_entry(
    source: CommitSource,
    commits: list[Commit] | CommitGroup,
    summary_fields: SummaryFields,
    mode: EntryMode = EntryMode.MANUAL,
    anchor: Optional[str] = None,
    tags: Optional[list[str]] = None,
    work_items: Optional[list[WorkItem]] = None,
    notes: Optional[str] = None,
    now: Optional[pendulum.DateTime] = None,
) -> Entry:
    """
    Assemble a ready-to-store entry from commits (newest first) and summary text.

    The newest commit is the anchor unless one is given. A diffstat that cannot
    be computed is recorded as zero rather than failing the build. A group
    keyed by a work item contributes that work item to the entry.

    Raises:
        NoCommitsError: if there is nothing to document
        ValidationError: if manual mode lacks what/why/how
    """
    group_key: Optional[str] = None
    if isinstance(commits, dict):
        group_key = commits["key"]
        commits = commits["commits"]
    if not commits:
        raise NoCommitsError("no commits to document")

    summary = resolve_summary(summary_fields, mode, commits)

    newest = commits[0]
    oldest = commits[-1]
    anchor_commit = anchor or newest["sha"]
    created_at = now if now is not None else now_utc()

    entry = get_entry_template(created_at)
    entry["id"] = generate_entry_id(anchor_commit, created_at)
    entry["anchor_commit"] = anchor_commit
    entry["commits"] = [commit["sha"] for commit in commits]
    entry["range"] = build_commit_range(commits)
    entry["diffstat"] = aggregate_diffstat(source, f"{oldest['sha']}^", newest["sha"])
    entry["summary"] = summary
    entry["tags"] = list(tags) if tags is not None else []
    entry["work_items"] = _merge_work_items(group_key, work_items or [])
    entry["notes"] = notes or None
    return entry


def resolve_summary(
    summary_fields: SummaryFields, mode: EntryMode, commits: list[Commit]
) -> Summary:
    what = _clean(summary_fields.get("what"))
    why = _clean(summary_fields.get("why"))
    how = _clean(summary_fields.get("how"))

    match mode:
        case EntryMode.AUTO:
            auto_what, auto_why, auto_how = extract_auto_content(commits)
            return {
                "what": what or auto_what,
                "why": why or auto_why,
                "how": how or auto_how,
            }
        case EntryMode.MINOR:
            if not what:
                raise ValidationError("missing required <what> argument")
            return {
                "what": what,
                "why": why or MINOR_CHANGE,
                "how": how or MINOR_CHANGE,
            }
        case EntryMode.MANUAL:
            missing = [
                name
                for name, value in (("what", what), ("why", why), ("how", how))
                if not value
            ]
            if missing:
                raise ValidationError(
                    "missing required fields (use --minor or --auto for alternatives)",
                    missing,
                )
            return {"what": what, "why": why, "how": how}
    raise ValueError(f"unknown entry mode: {mode}")


def extract_auto_content(commits: list[Commit]) -> tuple[str, str, str]:
    """
    Derive what/why/how from commit messages.

    what: subjects joined with "; "
    why: first paragraph of the first commit body with content
    how: remaining paragraphs of that body
    """
    subjects = [commit["subject"] for commit in commits if commit["subject"]]
    what = "; ".join(subjects) or AUTO_DOCUMENTED

    why = ""
    how = ""
    for commit in commits:
        paragraphs = split_into_paragraphs(commit["body"])
        if not paragraphs:
            continue
        why = paragraphs[0]
        how = "\n\n".join(paragraphs[1:])
        break

    return what, why or AUTO_DOCUMENTED, how or AUTO_DOCUMENTED


def split_into_paragraphs(text: str) -> list[str]:
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.strip().splitlines():
        if line.strip() == "":
            if current:
                paragraphs.append("\n".join(current))
                current = []
        else:
            current.append(line)
    if current:
        paragraphs.append("\n".join(current))
    return paragraphs


def build_commit_range(commits: list[Commit]) -> Optional[str]:
    if len(commits) <= 1:
        return None
    return f"{commits[-1]['short_sha']}..{commits[0]['short_sha']}"


def aggregate_diffstat(source: CommitSource, from_ref: str, to_ref: str) -> Diffstat:
    try:
        return source.diffstat(from_ref, to_ref)
    except GitError as e:
        logger.debug("diffstat unavailable for %s..%s: %s", from_ref, to_ref, e)
        return empty_diffstat()


def parse_work_item(item: str) -> WorkItem:
    if item.strip() == "":
        raise UserError("--work-item cannot be empty")
    if ":" not in item:
        raise UserError(f"--work-item must be in format system:id, got {item!r}")

    system, item_id = (part.strip() for part in item.split(":", 1))
    if system == "":
        raise UserError(f"--work-item system cannot be empty in {item!r}")
    if item_id == "":
        raise UserError(f"--work-item id cannot be empty in {item!r}")
    return {"system": system, "id": item_id}


def parse_work_items(items: Optional[list[str]]) -> list[WorkItem]:
    return [parse_work_item(item) for item in items or []]


def parse_range(range_str: str) -> tuple[str, str]:
    """Split `A..B` into its two refs."""
    parts = range_str.split("..")
    if len(parts) != 2 or parts[0].strip() == "" or parts[1].strip() == "":
        raise UserError(f"--range must be in format A..B, got {range_str!r}")
    return parts[0].strip(), parts[1].strip()


def amend_entry(
    entry: Entry,
    what: Optional[str] = None,
    why: Optional[str] = None,
    how: Optional[str] = None,
    tags: Optional[list[str]] = None,
    now: Optional[pendulum.DateTime] = None,
) -> Entry:
    """
    Return a copy with the given fields overwritten and updated_at bumped.

    Tags are replaced wholesale when provided. id and created_at never change.
    """
    if not what and not why and not how and tags is None:
        raise UserError(
            "at least one field must be specified for amendment "
            "(--what, --why, --how, or --tag)"
        )

    amended = deepcopy(entry)
    if what:
        amended["summary"]["what"] = what
    if why:
        amended["summary"]["why"] = why
    if how:
        amended["summary"]["how"] = how
    if tags is not None:
        amended["tags"] = list(tags)
    amended["updated_at"] = now if now is not None else now_utc()
    return amended


def _merge_work_items(
    group_key: Optional[str], work_items: list[WorkItem]
) -> list[WorkItem]:
    merged = list(work_items)
    if group_key is not None and is_work_item_key(group_key):
        group_item = parse_work_item(group_key)
        if group_item not in merged:
            merged.insert(0, group_item)
    return merged


def _clean(value: Optional[str]) -> str:
    if value is None:
        return ""
    return value.strip()
