"""Theme and style constants for the GUI.

All GUI components should reference these constants to maintain consistent styling.

Constants:
    COLORS: Color palette for buttons, text, and UI elements
    FONTS: Font family, size, and weight configurations
    PADDING: Spacing values for margins and padding
    WINDOW_SIZES: Default and minimum window dimensions
"""

COLORS = {
    "primary": "#1f538d",        # Main action buttons (blue)
    "primary_hover": "#14375e",
    "success": "#2d8a4e",        # Import confirmation (green)
    "success_hover": "#1e5c34",
    "danger": "#dc3545",         # Failed entries (red)
    "muted": "#6c757d",          # Secondary text (gray)
}

# Font configurations - tuple format: (family, size, weight)
FONTS = {
    "title": ("Segoe UI", 18, "bold"),
    "heading": ("Segoe UI", 14, "bold"),
    "body": ("Segoe UI", 12),
    "small": ("Segoe UI", 10),
}

# Padding and spacing values in pixels
PADDING = {
    "small": 10,
    "medium": 18,
    "large": 30,
}

# Window sizes - tuple format: (width, height)
WINDOW_SIZES = {
    "main": (760, 520),
    "min_main": (600, 400),
    "import_dialog": (520, 480),
    "config_dialog": (700, 360),
}
