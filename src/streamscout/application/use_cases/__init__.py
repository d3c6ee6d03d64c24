from .catalog import CatalogUseCase, TitlePage
from .playback import PlaybackUseCase

__all__ = ["CatalogUseCase", "PlaybackUseCase", "TitlePage"]
