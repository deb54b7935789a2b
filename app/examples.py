"""
Sample statements scored at the end of a pipeline run.
"""

# Scored once after evaluation in train mode ("the meat was bad")
SAMPLE_SINGLE_TEXT = "A carne estava ruim"

# Scored in both train and reuse mode
SAMPLE_BATCH_TEXTS = (
    "This was a horrible meal",
    "I love this spaghetti.",
    "The pizza was amazing.",
    "I will not eat here again.",
)

# Portuguese versions of the samples, handy for checking non-ASCII input
SAMPLE_TEXTS_PT = (
    "A carne estava ruim",
    "Esta foi uma refeição horrível",
    "Eu amo esse espaguete.",
    "A pizza estava incrível.",
    "Não vou comer aqui de novo.",
)
