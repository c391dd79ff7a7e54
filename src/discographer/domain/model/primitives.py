"""Domain primitives: scalar aliases.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type CountryCode = str
type Barcode = str
type Mbid = str
type DurationMs = int
type ReleaseDate = str  # YYYY, YYYY-MM or YYYY-MM-DD, as delivered by MusicBrainz
