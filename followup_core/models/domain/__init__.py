from .interaction_domain import Contact, Interaction, parse_tags, parse_timestamp

__all__ = ["Contact", "Interaction", "parse_tags", "parse_timestamp"]
