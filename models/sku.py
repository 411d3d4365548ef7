# models/sku.py
# The five product lines a finished quiz can route to, plus their result-card copy.

ENERGY = "Energy"
BALANCE = "Balance"
DETOX = "Detox"
IMMUNITY = "Immunity"
BEAUTY = "Beauty"

# Fixed preference ranking: among equal scores the earlier SKU wins.
TIE_BREAK_ORDER = (ENERGY, BALANCE, DETOX, IMMUNITY, BEAUTY)

DEFAULT_SKU = ENERGY

SKU_INFO = {
    ENERGY: {
        "title": "Energy",
        "copy": "Helps reduce tiredness and supports everyday vitality.",
        "ingredients": ["Vitamin C 48mg", "Iron 12mg", "Vitamin B12 2μg", "Vitamin E 18mg", "Vitamin D 150 IU", "Ginger Extract 100mg"],
        "cta": "Shop Energy",
    },
    BALANCE: {
        "title": "Balance",
        "copy": "Supports mood, stress resilience and overall balance.",
        "ingredients": ["CoQ10 21mg", "Resveratrol 100mg", "Vitamin E 18mg", "Zinc 10mg", "Vitamin C 48mg", "Selenium 55μg"],
        "cta": "Shop Balance",
    },
    DETOX: {
        "title": "Detox",
        "copy": "Liver support and lighter-feeling digestion.",
        "ingredients": ["Milk Thistle 100mg", "Iron 12mg", "Vitamin B12 2μg", "Vitamin C 48mg", "Zinc 10mg"],
        "cta": "Shop Detox",
    },
    IMMUNITY: {
        "title": "Immunity",
        "copy": "Daily immune support to help you stay resilient.",
        "ingredients": ["Ginger Extract 50mg", "Vitamin C 48mg", "Beta Glucan 25mg", "Vitamin E 9mg", "Iron 6mg", "Zinc 5mg"],
        "cta": "Shop Immunity",
    },
    BEAUTY: {
        "title": "Beauty",
        "copy": "Skin, hair & nails support with beauty-from-within actives.",
        "ingredients": ["CoQ10 60mg", "Vitamin C 48mg", "Resveratrol 50mg", "Vitamin E 9mg", "Selenium Yeast 27.5μg", "Zinc 5mg"],
        "cta": "Shop Beauty",
    },
}


def empty_tally():
    """Zeroed score for every SKU, in tie-break order."""
    return {sku: 0 for sku in TIE_BREAK_ORDER}


class ResultCard:
    def __init__(self, sku, card_data):
        self.sku = sku
        self.title = card_data.get('title', sku)
        self.copy = card_data.get('copy', '')
        self.ingredients = list(card_data.get('ingredients', []))
        self.cta = card_data.get('cta', f"Shop {sku}")

    @classmethod
    def for_sku(cls, sku):
        """Card for a SKU; unknown SKUs get the default (Energy) card."""
        if sku not in SKU_INFO:
            sku = DEFAULT_SKU
        return cls(sku, SKU_INFO[sku])

    def to_dict(self):
        return {
            'sku': self.sku,
            'title': self.title,
            'copy': self.copy,
            'ingredients': self.ingredients,
            'cta': self.cta
        }
