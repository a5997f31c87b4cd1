"""Font resolution and face rule synthesis.

Architecture
: `FontCatalog` values map family names to `FontDescriptor` matrices
  (style x weight -> local names and URLs). `build_foundries` assembles the
  custom, hosted and prepackaged catalogs into an immutable `FoundrySet`.
: `resolve_family` walks the foundries in preference order after one alias
  step; the first foundry declaring the family wins.
: `select_variants` honours per-family overrides (formats and unicode ranges)
  and `synthesize` turns each variant into a `FaceRule` whose `src` follows
  the requested format order.
: `MultiSourceResolver` races asynchronous sources per family and keeps the
  winners in a `CacheStore` persisted between passes.

The submodules are imported directly (``fontmagician.fonts.catalog`` and so
on) so that the configuration layer can depend on the name helpers without
pulling the whole pipeline in.
"""
