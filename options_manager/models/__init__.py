from options_manager.models.option import Option
from options_manager.models.option_value import OptionValue
from options_manager.models.product_variant import ProductVariant

__all__ = ["Option", "OptionValue", "ProductVariant"]
