from .catalog import PowerUpCatalog, PowerUpNotFound
from .templates import extract_variables, render_prompt

__all__ = ["PowerUpCatalog", "PowerUpNotFound", "extract_variables", "render_prompt"]
