"""Domain libraries: geodesy, region resolution, shelter data, sensors."""
