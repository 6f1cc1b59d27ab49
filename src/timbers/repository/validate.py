# SPDX-License-Identifier: MIT

from timbers.errors import ValidationError
from timbers.model.entry import Entry


def validate_entry(entry: Entry) -> None:
    missing: list[str] = []

    for field in ("schema", "kind", "id"):
        if not entry.get(field):
            missing.append(field)
    for field in ("created_at", "updated_at"):
        if entry.get(field) is None:
            missing.append(field)

    if not entry.get("anchor_commit"):
        missing.append("anchor_commit")
    if not entry.get("commits"):
        missing.append("commits")

    summary = entry.get("summary") or {}
    for field in ("what", "why", "how"):
        if not str(summary.get(field) or "").strip():
            missing.append(f"summary.{field}")

    if missing:
        raise ValidationError("missing required fields", missing)
