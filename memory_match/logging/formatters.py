"""Formatters for game log and debug output."""

from memory_match.models.card import Card, CardStatus, CardView, Deck

# Placeholder for a face-down card
HIDDEN_FACE = "?"


def format_card(card: Card | CardView) -> str:
    """Format a single card to string.

    Args:
        card: Card or view to format.

    Returns:
        The symbol if the card is face up, HIDDEN_FACE otherwise.
    """
    if card.status == CardStatus.HIDDEN or card.symbol is None:
        return HIDDEN_FACE
    return card.symbol


def format_deck(deck: Deck) -> str:
    """Format every symbol of a deck in board order.

    Args:
        deck: Deck to format.

    Returns:
        Comma-separated symbols (e.g., "A,B,B,A").
        Empty string if the deck is empty.
    """
    return ",".join(c.symbol for c in deck)


def format_board(views: list[CardView], columns: int) -> str:
    """Format the visible board as text rows.

    Args:
        views: Card views in board order.
        columns: Cards per row.

    Returns:
        One line per row, cards separated by spaces.
    """
    faces = [format_card(v) for v in views]
    rows = [faces[i : i + columns] for i in range(0, len(faces), columns)]
    return "\n".join(" ".join(row) for row in rows)
