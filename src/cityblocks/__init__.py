"""3D walk-through of city CO2 emissions, one reporting year at a time."""
