"""
Free-text task filter.

A record matches when the search term, lower-cased, is a substring of its
title, description or status (also lower-cased). There is no query
language: the whole term is one needle, including any spaces. The result is
always recomputed from the full collection and keeps its order.
"""

from __future__ import annotations

from typing import Iterable, List

from taskview.tasks.models import Task


def normalize_term(term: str) -> str:
    return (term or "").lower()


def filter_tasks(tasks: Iterable[Task], term: str) -> List[Task]:
    """Return the tasks matching ``term``, in original order."""
    needle = normalize_term(term)
    if not needle:
        return list(tasks)
    return [task for task in tasks if task.matches(needle)]
