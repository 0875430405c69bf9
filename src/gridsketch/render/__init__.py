"""Character canvas and shape rasterizers."""
