"""Theme preset registry, theme resolution and colour contrast checks."""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from sitebuilder.models.theme import ButtonStyle, ProjectTheme, ThemeOverrides, ThemeVars


class ThemePreset(NamedTuple):
    id: str
    label: str
    vars: ThemeVars
    button_style: ButtonStyle


class ResolvedTheme(NamedTuple):
    vars: ThemeVars
    button_style: ButtonStyle


def _preset(id_: str, label: str, button_style: ButtonStyle, **colors: str) -> ThemePreset:
    return ThemePreset(id_, label, ThemeVars(**colors), button_style)


THEME_PRESETS: List[ThemePreset] = [
    _preset("minimal-light", "Minimal Light", "rounded", bg="#f8fafc", surface="#ffffff",
            text="#0f172a", muted="#475569", primary="#1d4ed8", secondary="#0f766e",
            accent="#2563eb", border="#dbe2ea"),
    _preset("minimal-dark", "Minimal Dark", "rounded", bg="#0b1220", surface="#111827",
            text="#e5e7eb", muted="#94a3b8", primary="#38bdf8", secondary="#22d3ee",
            accent="#0ea5e9", border="#1f2937"),
    _preset("modern-neutral", "Modern Neutral", "rounded", bg="#f6f5f2", surface="#ffffff",
            text="#1f2937", muted="#6b7280", primary="#334155", secondary="#64748b",
            accent="#0f766e", border="#d1d5db"),
    _preset("bold-contrast", "Bold Contrast", "square", bg="#0f172a", surface="#ffffff",
            text="#0f172a", muted="#334155", primary="#ef4444", secondary="#0ea5e9",
            accent="#f59e0b", border="#0f172a"),
    _preset("coastal", "Coastal", "pill", bg="#f0f9ff", surface="#ffffff",
            text="#0c4a6e", muted="#0369a1", primary="#0891b2", secondary="#14b8a6",
            accent="#06b6d4", border="#bae6fd"),
    _preset("earthy", "Earthy", "rounded", bg="#faf7f2", surface="#fffdf9",
            text="#3f2d20", muted="#6e5847", primary="#8b5e34", secondary="#4d7c0f",
            accent="#b45309", border="#e5d5c5"),
    _preset("classic-blue", "Classic Blue", "rounded", bg="#eef4ff", surface="#ffffff",
            text="#0b3b8c", muted="#1d4ed8", primary="#1e40af", secondary="#0f766e",
            accent="#2563eb", border="#bfdbfe"),
    _preset("warm-sunset", "Warm Sunset", "pill", bg="#fff7ed", surface="#ffffff",
            text="#7c2d12", muted="#9a3412", primary="#ea580c", secondary="#f59e0b",
            accent="#f97316", border="#fed7aa"),
    _preset("clean-green", "Clean Green", "rounded", bg="#f0fdf4", surface="#ffffff",
            text="#14532d", muted="#166534", primary="#16a34a", secondary="#0d9488",
            accent="#22c55e", border="#bbf7d0"),
    _preset("slate-pro", "Slate Pro", "square", bg="#f1f5f9", surface="#ffffff",
            text="#0f172a", muted="#475569", primary="#1e293b", secondary="#334155",
            accent="#0f766e", border="#cbd5e1"),
]

DEFAULT_THEME_ID = "minimal-light"

_PRESETS_BY_ID: Dict[str, ThemePreset] = {preset.id: preset for preset in THEME_PRESETS}

_BUTTON_RADII: Dict[str, str] = {"rounded": "12px", "pill": "999px", "square": "2px"}

# Highest possible WCAG ratio; returned for colours that cannot be parsed
MAX_CONTRAST_RATIO = 21.0

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def get_theme_preset(preset_id: Optional[str] = None) -> ThemePreset:
    """Return the preset for *preset_id*, or the default preset when unknown."""
    return _PRESETS_BY_ID.get(preset_id or "", _PRESETS_BY_ID[DEFAULT_THEME_ID])


def normalize_theme(theme: Optional[ProjectTheme] = None) -> ProjectTheme:
    preset = get_theme_preset(theme.preset_id if theme else None)
    return ProjectTheme(
        preset_id=preset.id,
        overrides=theme.overrides if theme else ThemeOverrides(),
        button_style=(theme.button_style if theme else None) or preset.button_style,
    )


def resolve_theme(theme: Optional[ProjectTheme] = None) -> ResolvedTheme:
    """Merge the theme's preset variables with its overrides (override wins per key)."""
    normalized = normalize_theme(theme)
    preset = get_theme_preset(normalized.preset_id)
    overrides = normalized.overrides.model_dump(exclude_none=True)
    merged = preset.vars.model_copy(update=overrides)
    return ResolvedTheme(merged, normalized.button_style or preset.button_style)


def compact_overrides(preset_id: Optional[str], overrides: ThemeOverrides) -> ThemeOverrides:
    """Drop overrides whose value equals the preset's own value.

    Editors send back every colour they display; an override that matches
    the preset is not an override.
    """
    preset_vars = get_theme_preset(preset_id).vars
    kept = {
        key: value
        for key, value in overrides.model_dump(exclude_none=True).items()
        if value.strip().lower() != getattr(preset_vars, key).strip().lower()
    }
    return ThemeOverrides(**kept)


def theme_vars_to_css(vars: ThemeVars) -> str:
    return "\n".join(f"--{name}: {value};" for name, value in vars.model_dump().items())


def button_radius(button_style: ButtonStyle) -> str:
    return _BUTTON_RADII.get(button_style, _BUTTON_RADII["rounded"])


def _hex_to_rgb(value: str) -> Optional[Tuple[int, int, int]]:
    digits = value.strip().lstrip("#")
    if len(digits) not in (3, 6) or not _HEX_RE.match(digits):
        return None
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    number = int(digits, 16)
    return (number >> 16) & 255, (number >> 8) & 255, number & 255


def _channel_to_linear(channel: int) -> float:
    ratio = channel / 255
    if ratio <= 0.03928:
        return ratio / 12.92
    return ((ratio + 0.055) / 1.055) ** 2.4


def _relative_luminance(rgb: Tuple[int, int, int]) -> float:
    r, g, b = (_channel_to_linear(channel) for channel in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: str, background: str) -> float:
    """Return the WCAG contrast ratio between two hex colours.

    Malformed input yields :data:`MAX_CONTRAST_RATIO` so that a typo in a
    colour field never blocks the editor.
    """
    fg = _hex_to_rgb(foreground or "")
    bg = _hex_to_rgb(background or "")
    if fg is None or bg is None:
        return MAX_CONTRAST_RATIO

    lighter, darker = sorted((_relative_luminance(fg), _relative_luminance(bg)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)
