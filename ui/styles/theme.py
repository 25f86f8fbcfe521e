"""
Theme and stylesheet management.
"""

# Dark theme colors
DARK_COLORS = {
    "background": "#121212",
    "card_background": "#1E1E1E",
    "background_secondary": "#252525",
    "hover": "#2D2D2D",
    "text": "#FFFFFF",
    "text_secondary": "#B3B3B3",
    "border": "#333333",
    "positive": "#4CAF50",
    "negative": "#FF4D6A",
    "accent": "#6D5ACD",
    "accent_light": "#9485E0",
}

# Light theme colors
LIGHT_COLORS = {
    "background": "#F5F5F5",
    "card_background": "#FFFFFF",
    "background_secondary": "#F0F0F0",
    "hover": "#FAFAFA",
    "text": "#121212",
    "text_secondary": "#666666",
    "border": "#E0E0E0",
    "positive": "#2E7D32",
    "negative": "#C62828",
    "accent": "#6D5ACD",
    "accent_light": "#9485E0",
}


def get_theme_colors(theme_mode: str) -> dict:
    """Get color scheme based on theme mode."""
    if theme_mode == "light":
        return LIGHT_COLORS
    else:  # "dark" or default
        return DARK_COLORS


def change_color(value: float | None, theme_mode: str) -> str:
    """Color for a signed 24h change; zero counts as positive."""
    colors = get_theme_colors(theme_mode)
    if value is None:
        return colors["text_secondary"]
    return colors["positive"] if value >= 0 else colors["negative"]


def get_stylesheet(name: str, theme_mode: str = "dark") -> str:
    """Get a stylesheet by name with theme support."""
    colors = get_theme_colors(theme_mode)

    stylesheets = {
        "main_window": f"""
            QMainWindow, QWidget#centralWidget {{
                background-color: {colors['background']};
            }}
            QScrollArea {{
                border: none;
                background: transparent;
            }}
            QWidget#scrollContent {{
                background: transparent;
            }}
        """,

        "header": f"""
            QWidget#header {{
                border-bottom: 1px solid {colors['border']};
            }}
            QLabel#appTitle {{
                color: {colors['text']};
                font-size: 18px;
                font-weight: bold;
            }}
        """,

        "empty_state": f"""
            QWidget#emptyState {{
                background-color: {colors['background_secondary']};
                border-radius: 8px;
            }}
            QLabel {{
                color: {colors['text']};
                font-size: 16px;
            }}
        """,

        "error_alert": f"""
            QWidget#errorAlert {{
                background-color: {colors['background_secondary']};
                border: 1px solid {colors['negative']};
                border-radius: 8px;
            }}
            QLabel#errorMessage {{
                color: {colors['negative']};
                font-size: 14px;
            }}
        """,
    }

    return stylesheets.get(name, "")

