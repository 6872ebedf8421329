from app.core.config import STYLE_PLACEHOLDER


def build_prompt(template: str, style: str) -> str:
    """Substitute ``style`` into every placeholder occurrence of ``template``."""
    return template.replace(STYLE_PLACEHOLDER, style)
