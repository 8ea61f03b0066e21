# Config package
from config.settings import (
    DEFAULT_CHAIN_CATEGORIES,
    ENTRYPOINTS,
    USDC_DECIMALS,
    load_chain_categories,
)
