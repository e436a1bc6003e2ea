"""Pydantic models for configuration schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from launcher.core.items import Item


class ItemConfig(BaseModel):
    """An item declared in configuration or an items file."""

    id: str | None = Field(default=None, description="Unique id (defaults to the title)")
    title: str = Field(description="Display title, used for matching")
    subtitle: str | None = Field(default=None, description="Secondary text, used for matching")
    icon: str | None = Field(default=None, description="Emoji or symbol shown before the title")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        """Accept numeric ids from YAML."""
        if v is None:
            return None
        return str(v)

    def to_item(self) -> Item:
        return Item(
            id=self.id if self.id is not None else self.title,
            title=self.title,
            subtitle=self.subtitle,
            icon=self.icon,
        )


class LauncherOptions(BaseModel):
    """Appearance and behavior of the launcher popup."""

    placeholder: str = Field(default="Search...", description="Text shown while the query is empty")
    prompt: str = Field(default="❯ ", description="Prompt shown before the query")
    max_visible_items: int = Field(default=8, ge=1, description="Rows shown before scrolling")
    width: int | None = Field(default=None, ge=10, description="Popup width in columns")
    show_icons: bool = Field(default=True, description="Show the icon column")
    fallback_icon: str = Field(default="◦", description="Icon for items without one")
    mouse_support: bool = Field(default=True, description="Allow clicking result rows")
    color: bool = Field(default=True, description="Enable/disable colors")


class Theme(BaseModel):
    """Theme definition mapping ui element names to color specs."""

    name: str = Field(description="Theme name, e.g., 'default'")
    styles: dict[str, str] = Field(
        default_factory=dict,
        description="Element name (e.g., 'ui:selected') to color spec",
    )


class Config(BaseModel):
    """Top-level configuration."""

    launcher: LauncherOptions = Field(default_factory=LauncherOptions)
    items: list[ItemConfig] = Field(default_factory=list, description="Items always offered")
    themes: dict[str, Theme] = Field(default_factory=dict)
    keybindings: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="Mode name to keybindings mapping"
    )
    aliases: dict[str, str] = Field(default_factory=dict, description="Command aliases")

    @field_validator("themes", mode="before")
    @classmethod
    def parse_themes(cls, v: dict[str, Any]) -> dict[str, Theme]:
        """Parse theme definitions, keyed by lowercase name."""
        result = {}
        for name, data in (v or {}).items():
            if isinstance(data, Theme):
                result[name.lower()] = data
            elif isinstance(data, dict):
                styles = data.get("styles", {k: val for k, val in data.items() if k != "name"})
                result[name.lower()] = Theme(name=name, styles=styles)
        return result

    def get_items(self) -> list[Item]:
        """Get configured items as launcher items."""
        return [item.to_item() for item in self.items]

    def get_theme(self, name: str | None = None) -> Theme:
        """Get theme by name, or default theme."""
        if name and name.lower() in self.themes:
            return self.themes[name.lower()]
        if "default" in self.themes:
            return self.themes["default"]
        # Return a minimal default theme
        return Theme(name="default", styles={})
