"""Per-conversion state passed through the resolvers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import ConversionOptions
from .numbering.counters import ListCounterStore
from .numbering.definitions import NumberingDefinitions
from .styles.context import StyleContext
from .utils.cache import MetadataCache


@dataclass
class ConverterContext:
    """
    Everything one ``to_flow_blocks`` pass shares between nodes.

    The counter store and the metadata cache live here so that two
    conversions never observe each other's state.
    """

    style_context: Optional[StyleContext] = None
    options: ConversionOptions = field(default_factory=ConversionOptions)
    numbering: Optional[NumberingDefinitions] = None
    list_counters: ListCounterStore = field(default_factory=ListCounterStore)
    metadata_cache: MetadataCache = field(default_factory=MetadataCache)
    table_style_paragraph_props: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.numbering is None:
            numbering_data = self.style_context.numbering if self.style_context else None
            self.numbering = NumberingDefinitions(numbering_data)

    @classmethod
    def create(
        cls,
        style_context: Optional[StyleContext] = None,
        options: Optional[ConversionOptions] = None,
    ) -> "ConverterContext":
        options = options or ConversionOptions()
        return cls(
            style_context=style_context,
            options=options,
            metadata_cache=MetadataCache(options.metadata_cache_size),
        )

    def with_table_style(self, paragraph_props: Optional[Dict[str, Any]]) -> "ConverterContext":
        """Return a context sharing this pass's state with table-style paragraph props set."""
        return ConverterContext(
            style_context=self.style_context,
            options=self.options,
            numbering=self.numbering,
            list_counters=self.list_counters,
            metadata_cache=self.metadata_cache,
            table_style_paragraph_props=paragraph_props,
        )
