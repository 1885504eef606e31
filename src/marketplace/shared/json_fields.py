"""Helpers for list-valued attributes stored as JSON text."""

import json


def dump_list(values):
    return json.dumps(list(values or []))


def load_list(raw):
    return json.loads(raw) if raw else []


def clean_strings(values):
    """Strip entries and drop blanks, keeping first-seen order without duplicates."""
    seen = []
    for value in values or []:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def load_object(raw):
    return json.loads(raw) if raw else {}
