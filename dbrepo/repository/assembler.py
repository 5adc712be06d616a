"""Assembles a repository model from a live metadata source."""

import logging
from typing import Optional

from ..database.base import MetadataSource
from ..diagnostics import DiagnosticSink
from ..errors import IntrospectionError, MetadataConnectionError
from .builders import EntityBuilder
from .model import RepositoryModel
from .rules import RepositoryRules, StandardRepositoryRules

logger = logging.getLogger(__name__)


class RepositoryModelAssembler:
    """Builds a fresh ``RepositoryModel`` from all tables of a metadata source.

    The connection is acquired once per run and always released before
    ``assemble`` returns. Connection and table enumeration failures are
    fatal and raised; per-column rule failures are absorbed by the
    builders.

    Example:
        source = DuckDBMetadataSource("warehouse.duckdb")
        assembler = RepositoryModelAssembler(schema_filter="main")
        model = assembler.assemble(source)
    """

    def __init__(
        self,
        rules: Optional[RepositoryRules] = None,
        sink: Optional[DiagnosticSink] = None,
        schema_filter: Optional[str] = None,
        include_views: bool = True,
    ):
        self.rules = rules or StandardRepositoryRules()
        self.sink = sink or DiagnosticSink()
        self.schema_filter = schema_filter
        self.include_views = include_views
        self.entity_builder = EntityBuilder(self.rules, self.sink)

    def assemble(self, source: MetadataSource) -> RepositoryModel:
        """Introspect the source and return the assembled model.

        Raises:
            MetadataConnectionError: the connection cannot be opened or closed
            IntrospectionError: tables cannot be enumerated
        """
        try:
            source.connect()
        except Exception as e:
            raise MetadataConnectionError(
                f"Cannot get connection to {source.database_name}: {e}",
                details={"database": source.database_name},
            ) from e

        failed = True
        try:
            model = self._build_model(source)
            failed = False
        finally:
            self._release(source, raise_errors=not failed)

        self.sink.info(f"Repository model assembled: {len(model)} entities")
        return model

    def _build_model(self, source: MetadataSource) -> RepositoryModel:
        try:
            tables = source.load_tables(schema_filter=self.schema_filter, include_views=self.include_views)
        except Exception as e:
            raise IntrospectionError(
                f"Cannot read tables metadata: {e}",
                details={"database": source.database_name, "schema": self.schema_filter},
            ) from e

        model = RepositoryModel(
            database_name=source.database_name,
            database_product_name=source.product_name,
        )
        for table in tables:
            self.entity_builder.build(model, table)
        return model

    def _release(self, source: MetadataSource, raise_errors: bool) -> None:
        """Close the source; a close error is only raised if nothing else failed."""
        try:
            source.close()
        except Exception as e:
            if raise_errors:
                raise MetadataConnectionError(
                    f"Cannot close connection to {source.database_name}: {e}",
                    details={"database": source.database_name},
                ) from e
            logger.warning("Cannot close connection to %s: %s", source.database_name, e)
