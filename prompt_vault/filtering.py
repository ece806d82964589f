from typing import List, Sequence

from prompt_vault.types import FilterState, Row


def _column(row: Row, index: int) -> str:
    return row[index] if index < len(row) else ""


def list_categories(rows: Sequence[Row]) -> List[str]:
    """Distinct non-blank column A values, trimmed, in first-seen order."""
    categories: dict = {}
    for row in rows:
        category = _column(row, 0).strip()
        if category:
            categories.setdefault(category, None)
    return list(categories)


def filter_prompts(rows: Sequence[Row], state: FilterState) -> List[str]:
    """
    Return the prompts (column B) visible under `state`.

    A row is hidden when a category is selected and its trimmed column A
    differs, when a query is set and column B does not contain it (case
    insensitive), or when column B is blank. Prompts are returned untrimmed.
    """
    query = state.query.lower()
    prompts: List[str] = []
    for row in rows:
        prompt = _column(row, 1)
        if state.category and _column(row, 0).strip() != state.category:
            continue
        if query and query not in prompt.lower():
            continue
        if prompt.strip():
            prompts.append(prompt)
    return prompts
