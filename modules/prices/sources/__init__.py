from .base import PriceSource
from .tile_expert import TileExpertPriceSource

SOURCE_CLASSES = {
    TileExpertPriceSource.name: TileExpertPriceSource,
}

__all__ = ['PriceSource', 'TileExpertPriceSource', 'SOURCE_CLASSES']
