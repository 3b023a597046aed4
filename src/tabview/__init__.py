"""tabview: tabbed navigation over a region-based terminal layout."""

# Layout arithmetic
from tabview.layout import Direction, Length, Min, Percentage, Rect, split

# Navigation
from tabview.navigation import NavigationState, View

# Styling
from tabview.style import Alignment, Color, Span, Style

# Drawing surface
from tabview.surface import Canvas, DrawingSurface

# Composition
from tabview.composer import DEFAULT_POLICIES, LayoutComposer, LayoutPolicy

# Input handling
from tabview.keys import Key, KeyId, matches_key, parse_key
from tabview.stdin_buffer import StdinBuffer

# Terminal
from tabview.terminal import ProcessTerminal, Terminal, TerminalError

# Application loop
from tabview.app import Command, apply_command, command_for_key, run_app

__all__ = [
    # Layout
    "Direction",
    "Length",
    "Min",
    "Percentage",
    "Rect",
    "split",
    # Navigation
    "NavigationState",
    "View",
    # Styling
    "Alignment",
    "Color",
    "Span",
    "Style",
    # Surface
    "Canvas",
    "DrawingSurface",
    # Composition
    "DEFAULT_POLICIES",
    "LayoutComposer",
    "LayoutPolicy",
    # Input
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "TerminalError",
    # App
    "Command",
    "apply_command",
    "command_for_key",
    "run_app",
]
