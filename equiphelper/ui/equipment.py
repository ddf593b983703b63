"""Equipment categories and their canned questions."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Sequence, Tuple


class EquipmentCategory(str, Enum):
    HELMET = "Helmet"
    TURNOUT_GEAR = "Turnout Gear"
    BOOTS = "Boots"
    GLOVES = "Gloves"
    HOOD = "Hood"
    PANTS = "Pants"


DEFAULT_QUESTIONS: Dict[EquipmentCategory, Tuple[str, ...]] = {
    EquipmentCategory.HELMET: (
        "What are the features and functions of my helmet?",
        "How do I properly don, doff, and adjust my helmet?",
        "What are the limitations and purpose of my helmet?",
        "How do I install replacement parts or make repairs to my helmet?",
        "How do I store my helmet properly?",
        "How can I minimize the risk of injury while using my helmet?",
    ),
    EquipmentCategory.TURNOUT_GEAR: (
        "What are the construction, features, and function of my garment?",
        "What is the proper procedure for donning and doffing my MT94 ensemble?",
        "How do I ensure proper overlap and fit of my turnout gear?",
        "What are the limitations and purpose of my garment?",
        "What is the correct method for reassembling my turnout gear?",
    ),
    EquipmentCategory.BOOTS: (
        "What are the limitations and purpose of my fire boots?",
        "How can I minimize the risk of injury while using my fire boots?",
        "What is the correct way to clean, decontaminate, and disinfect my fire boots?",
        "How do I ensure proper size and fit of my fire boots?",
        "What safety features should I be aware of for my fire boots?",
    ),
    EquipmentCategory.GLOVES: (
        "What are the limitations and purpose of structural gloves?",
        "How do I properly wash, decontaminate, and store my gloves?",
        "How can I ensure my structural gloves are being used safely?",
    ),
    EquipmentCategory.HOOD: (
        "What are the limitations and purpose of my hood?",
        "How do I wash, decontaminate, and store my hood?",
        "How can I minimize the risk of injury while using my hood?",
    ),
    EquipmentCategory.PANTS: (
        "What are the limitations and purpose of my pants?",
        "How do I don and doff my pants properly?",
        "What is the proper way to wash, decontaminate, and sanitize my pants?",
    ),
}


class EquipmentCatalog:
    """Validated mapping from category to its ordered question list."""

    def __init__(self, questions: Mapping[EquipmentCategory, Sequence[str]] = DEFAULT_QUESTIONS) -> None:
        missing = [category.value for category in EquipmentCategory if category not in questions]
        if missing:
            raise ValueError(f"Missing questions for categories: {', '.join(missing)}")
        catalog: Dict[EquipmentCategory, Tuple[str, ...]] = {}
        for category, items in questions.items():
            category = EquipmentCategory(category)
            items = tuple(items)
            if not items:
                raise ValueError(f"No questions for {category.value}")
            if any(not item.strip() for item in items):
                raise ValueError(f"Blank question for {category.value}")
            if len(set(items)) != len(items):
                raise ValueError(f"Duplicate question for {category.value}")
            catalog[category] = items
        self._questions = catalog

    @property
    def categories(self) -> Tuple[EquipmentCategory, ...]:
        return tuple(category for category in EquipmentCategory if category in self._questions)

    def questions(self, category: EquipmentCategory | str | None) -> Tuple[str, ...]:
        if not category:
            return ()
        return self._questions[EquipmentCategory(category)]
