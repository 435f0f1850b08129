import json
import random

import pytest


@pytest.fixture
def cars_json(tmp_path):
    """A small cars dataset on disk with a few incomplete records mixed in."""

    rng = random.Random(0)
    cars = []
    for index in range(120):
        horsepower = rng.uniform(50.0, 230.0)
        mpg = 45.0 - 0.15 * horsepower + rng.gauss(0.0, 1.5)
        cars.append(
            {
                "Name": f"car {index}",
                "Miles_per_Gallon": round(mpg, 1),
                "Horsepower": round(horsepower),
                "Cylinders": rng.choice([4, 6, 8]),
            }
        )
    cars[3]["Miles_per_Gallon"] = None
    cars[10]["Horsepower"] = None
    path = tmp_path / "carsData.json"
    path.write_text(json.dumps(cars), encoding="utf-8")
    return path
