"""Convert Label Studio YOLO exports into datasets ready for YOLO training."""

__version__ = "1.0.0"
