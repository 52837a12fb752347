"""
System prompts for the chat and title relays.
"""
from __future__ import annotations

CHAT_SYSTEM_PROMPT = "You are a helpful customer support assistant."

TITLE_SYSTEM_PROMPT = (
    "You write product listing titles from a photo of an item.\n"
    "Return ONLY a JSON object, with no markdown fences and no commentary, "
    "matching exactly this schema:\n"
    '{"title": string, "object_ranked": [string], "tail_ranked": [string]}\n'
    "Rules:\n"
    "- title: a short, specific product title for the item in the image.\n"
    "- object_ranked: up to 4 candidate names for the main object, most likely first. "
    "Each is a singular noun or short noun phrase (e.g. \"Vase\", \"Teapot\").\n"
    "- tail_ranked: up to 4 keywords that distinguish this item (material, maker, "
    "style, era, color, pattern), most useful first.\n"
    "- Avoid vague terms such as \"item\", \"thing\", \"object\", \"nice\" or \"vintage piece\".\n"
    "- Do not repeat any word that already appears in the hint text; the caller "
    "already has those.\n"
    "- Detail mode low: keep tail_ranked short and basic (color, broad material).\n"
    "- Detail mode high: make tail_ranked richer (specific material, technique, "
    "pattern, era, marks visible in the image).\n"
    "- If you are unsure, still return the JSON object with your best guesses."
)


def build_title_user_text(hint_text: str, detail: str) -> str:
    """Plain-text part of the title user turn."""
    return f"Hint text: {hint_text}\nDetail mode: {detail}"
