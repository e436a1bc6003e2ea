"""Default configuration values."""

DEFAULT_CONFIG_YAML = """
launcher:
  placeholder: "Search..."
  prompt: "❯ "
  max_visible_items: 8
  show_icons: true
  fallback_icon: "◦"
  mouse_support: true
  color: true

themes:
  default:
    styles:
      "ui:prompt": "bold cyan"
      "ui:query": "white"
      "ui:placeholder": "gray"
      "ui:separator": "gray"
      "ui:icon": "yellow"
      "ui:title": "white"
      "ui:subtitle": "gray"
      "ui:selected": "bold bright white on blue"
      "ui:selected-subtitle": "bright white on blue"
      "ui:score": "gray"

keybindings:
  launcher:
    up: select-previous
    down: select-next
    ctrl-p: select-previous
    ctrl-n: select-next
    pageup: select-first
    pagedown: select-last
    ctrl-u: clear-query
    enter: submit
    alt-enter: submit-option
    ctrl-o: submit-command
    escape: dismiss
    ctrl-c: dismiss
    ctrl-g: dismiss

aliases:
  next: select-next
  prev: select-previous
  ok: submit
  cancel: dismiss
"""
