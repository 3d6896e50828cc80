"""Fetch OSM wiki image metadata into the Taginfo wiki database."""
