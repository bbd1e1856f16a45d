"""
Icon generation.

Modules:
- composer: gradient background, label bar and text drawing
- glyph: SVG recoloring and glyph placement
- raster: raster operations run in their own process
- pipeline: orchestration of drawing and raster steps
"""
