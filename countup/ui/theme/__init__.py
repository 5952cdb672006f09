"""Theme: colors and font sizes the render model's style names resolve to."""

# Keys match the color names used by countup.core.render_model
COLORS = {
    "background": "#404040",
    "label": "#B4B4B4",
    "value": "#FFFFFF",
}

# Pixel sizes on the logical canvas, before window scaling
FONTS = {
    "family": "Monospace",
    "large": 12,
    "small": 7,
}

__all__ = ["COLORS", "FONTS"]
