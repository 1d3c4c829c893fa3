import json
import logging
from functools import cached_property
from pathlib import Path

from cardfolio.domain.models import CardRecord

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self, catalog_file: str):
        self.catalog_file = Path(catalog_file)

    def load_cards(self) -> list[CardRecord]:
        return list(self._cards)

    def get(self, card_id: str) -> CardRecord | None:
        return next((card for card in self._cards if card.card_id == card_id), None)

    @cached_property
    def _cards(self) -> tuple[CardRecord, ...]:
        if not self.catalog_file.exists():
            raise FileNotFoundError(f"Card catalog not found: {self.catalog_file}")

        with self.catalog_file.open("r", encoding="utf-8") as fh:
            data = json.load(fh)

        cards = tuple(CardRecord.model_validate(item) for item in data)
        logger.info("Loaded %d cards from %s", len(cards), self.catalog_file)
        return cards
