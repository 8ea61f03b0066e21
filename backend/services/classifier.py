"""
Chain Classifier
Labels chains as L2 / L1 / Alt-L1 by substring match against curated name lists.

This is a heuristic, not a taxonomy. The lists are data (see config.settings)
and can be replaced without touching the matching below.
"""

from typing import Dict, Iterable, List, Optional

from config.settings import load_chain_categories
from services.chain_models import ChainCategory, NetworkRecord

CATEGORY_LABELS = {
    ChainCategory.L2: "L2",
    ChainCategory.L1: "L1",
    ChainCategory.ALT_L1: "Alt-L1",
}


class ChainClassifier:
    """Case-insensitive substring classifier. L2 list is checked before L1."""

    def __init__(self, categories: Optional[Dict[str, List[str]]] = None):
        categories = categories if categories is not None else load_chain_categories()
        self.l2_names = [n.lower() for n in categories.get("l2", [])]
        self.l1_names = [n.lower() for n in categories.get("l1", [])]

    @staticmethod
    def _contains_any(name: str, needles: Iterable[str]) -> bool:
        return any(needle in name for needle in needles)

    def classify(self, record: NetworkRecord) -> ChainCategory:
        name = record.name.lower()
        if self._contains_any(name, self.l2_names):
            return ChainCategory.L2
        if self._contains_any(name, self.l1_names):
            return ChainCategory.L1
        return ChainCategory.ALT_L1

    def matches(self, record: NetworkRecord, category: ChainCategory) -> bool:
        if category is ChainCategory.ALL:
            return True
        return self.classify(record) is category

    def label(self, record: NetworkRecord) -> str:
        return CATEGORY_LABELS[self.classify(record)]
