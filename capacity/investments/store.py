"""
Flat JSON file storage for the investment dashboard.

Files live in settings.INVESTMENT_DATA_DIR: equipment.json and products.json
hold lists, scenarios.json maps a scenario key to its description.
"""
import json
import logging
import os

from django.conf import settings

logger = logging.getLogger(__name__)

EQUIPMENT = 'equipment'
PRODUCTS = 'products'
SCENARIOS = 'scenarios'

EMPTY = {
    EQUIPMENT: list,
    PRODUCTS: list,
    SCENARIOS: dict,
}


class InvestmentDataStore:

    def __init__(self, data_dir=None):
        self.data_dir = data_dir or settings.INVESTMENT_DATA_DIR

    def path_for(self, name):
        return os.path.join(self.data_dir, f'{name}.json')

    def load(self, name):
        """Read a data file; a missing or corrupt file reads as empty."""
        path = self.path_for(name)
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                return json.load(fh)
        except FileNotFoundError:
            logger.warning("Investment data file %s not found, using empty data", path)
        except json.JSONDecodeError as exc:
            logger.error("Investment data file %s is not valid JSON: %s", path, exc)
        return EMPTY[name]()

    def save(self, name, data):
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path_for(name)
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)
        logger.info("Saved %s (%d records) to %s", name, len(data), path)

    def equipment(self):
        return self.load(EQUIPMENT)

    def products(self):
        return self.load(PRODUCTS)

    def scenarios(self):
        return self.load(SCENARIOS)
