"""
Label mappings for sentiment predictions.
Converts boolean predictions to human-readable labels.
"""

SENTIMENT_LABELS = {
    False: "Negative",
    True: "Positive"
}


def get_sentiment_label(prediction: bool) -> str:
    """
    Convert a sentiment prediction to a human-readable label.

    Args:
        prediction: Predicted label (True for positive)

    Returns:
        "Positive" or "Negative"
    """
    return SENTIMENT_LABELS[bool(prediction)]


def get_sentiment_description(prediction: bool) -> str:
    """
    Get a detailed description of a sentiment prediction.

    Args:
        prediction: Predicted label (True for positive)

    Returns:
        Detailed description
    """
    descriptions = {
        False: "Negative - The text expresses a negative sentiment or opinion",
        True: "Positive - The text expresses a positive sentiment or opinion"
    }
    return descriptions[bool(prediction)]
