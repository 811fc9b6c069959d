from .layout import LAYOUT_SCHEMA, Layout, LayoutError, LayoutValidator, layout_from_dict, load_layout

__all__ = ["LAYOUT_SCHEMA", "Layout", "LayoutError", "LayoutValidator", "layout_from_dict", "load_layout"]
