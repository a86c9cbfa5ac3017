"""Keyword rule classifier for the document taxonomy."""

from __future__ import annotations

from dataclasses import dataclass

from doc_vault.models.taxonomy import Category


@dataclass(slots=True, frozen=True)
class CategoryRule:
    category: Category
    triggers: tuple[str, ...]

    def matches(self, content: str, file_name: str) -> bool:
        return any(trigger in content or trigger in file_name for trigger in self.triggers)


# Evaluated in order; the first matching rule wins.
RULES: tuple[CategoryRule, ...] = (
    CategoryRule(Category.FINANCE, ("invoice", "payment", "budget")),
    CategoryRule(Category.HR, ("employee", "hiring", "salary")),
    CategoryRule(Category.CONTRACTS, ("contract", "agreement", "terms")),
    CategoryRule(Category.LEGAL, ("legal", "compliance", "regulation")),
    CategoryRule(Category.TECHNICAL_REPORTS, ("technical", "software", "development")),
)

DEFAULT_CATEGORY = Category.OTHER


def classify(content: str, file_name: str) -> Category:
    lowered_content = content.lower()
    lowered_name = file_name.lower()
    for rule in RULES:
        if rule.matches(lowered_content, lowered_name):
            return rule.category
    return DEFAULT_CATEGORY


__all__ = ["CategoryRule", "RULES", "DEFAULT_CATEGORY", "classify"]
