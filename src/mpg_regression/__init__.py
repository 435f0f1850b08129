"""Linear regression of fuel economy (MPG) on horsepower.

The package fetches the public cars dataset, drops incomplete records,
min-max normalises horsepower and MPG, and trains a two-layer linear
network with Adam against mean squared error:

- :mod:`mpg_regression.data` retrieves and prepares the records,
- :mod:`mpg_regression.models` declares the network,
- :mod:`mpg_regression.training` runs the optimisation and predictions,
- :mod:`mpg_regression.utils` plots data and training curves,
- :mod:`mpg_regression.pipeline` wires the stages together.
"""

__all__ = [
    "data",
    "errors",
    "models",
    "pipeline",
    "training",
    "utils",
]
