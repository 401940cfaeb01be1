"""folio: frontmatter catalogs with a schema-typed record model and a pure query engine."""

__version__ = "0.1.0"
