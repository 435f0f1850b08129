import pytest

torch = pytest.importorskip("torch")

from mpg_regression.errors import EmptyDatasetError, NetworkError
from mpg_regression.models import LinearRegressionConfig
from mpg_regression.pipeline import PipelineConfig, run_pipeline
from mpg_regression.training import TrainingCallback, TrainingConfig


class CountingCallback(TrainingCallback):
    def __init__(self) -> None:
        self.epochs: list[int] = []

    def on_epoch_end(self, metrics) -> None:
        self.epochs.append(metrics.epoch)


def test_pipeline_runs_end_to_end_from_url(cars_json) -> None:
    seen = []
    callback = CountingCallback()
    config = PipelineConfig(
        url=cars_json.as_uri(),
        training=TrainingConfig(epochs=5, seed=0, progress=False),
    )
    result = run_pipeline(config, callbacks=[callback], on_records=seen.append)

    assert len(result.records) == 118
    assert seen == [result.records]
    assert len(result.prepared) == 118
    assert callback.epochs == [0, 1, 2, 3, 4]
    assert len(result.history) == 5
    assert result.prepared.input_bounds.min >= 50.0
    assert result.prepared.input_bounds.max <= 230.0


def test_pipeline_prefers_local_data_path(cars_json, tmp_path) -> None:
    config = PipelineConfig(
        url=(tmp_path / "does-not-exist.json").as_uri(),
        data_path=cars_json,
        model=LinearRegressionConfig(hidden_units=2),
        training=TrainingConfig(epochs=1, progress=False),
    )
    result = run_pipeline(config)
    assert result.model[0].out_features == 2


def test_seeded_pipeline_is_reproducible(cars_json) -> None:
    def run():
        config = PipelineConfig(
            data_path=cars_json,
            training=TrainingConfig(epochs=3, seed=11, progress=False),
        )
        return run_pipeline(config).history.loss

    assert run() == run()


def test_pipeline_propagates_fatal_errors(tmp_path) -> None:
    with pytest.raises(NetworkError):
        run_pipeline(PipelineConfig(url=(tmp_path / "missing.json").as_uri()))

    empty = tmp_path / "empty.json"
    empty.write_text('[{"Miles_per_Gallon": null, "Horsepower": 100}]', encoding="utf-8")
    with pytest.raises(EmptyDatasetError):
        run_pipeline(PipelineConfig(data_path=empty))


def test_pipeline_config_validation() -> None:
    with pytest.raises(ValueError):
        PipelineConfig(timeout=0)
