import warnings

import pytest

torch = pytest.importorskip("torch")
from torch import nn

from mpg_regression.errors import ConvergenceWarning, FrameworkError
from mpg_regression.models import build_model
from mpg_regression.training import (
    EpochMetrics,
    RegressionTrainer,
    TrainingCallback,
    TrainingConfig,
    predict,
    regression_line,
    train,
)
from mpg_regression.data import NormalizationBounds


class RecordingCallback(TrainingCallback):
    def __init__(self) -> None:
        self.began = 0
        self.events: list[EpochMetrics] = []
        self.finished = None

    def on_train_begin(self, config: TrainingConfig) -> None:
        self.began += 1

    def on_epoch_end(self, metrics: EpochMetrics) -> None:
        self.events.append(metrics)

    def on_train_end(self, history) -> None:
        self.finished = history


class ExplodingCallback(TrainingCallback):
    def on_epoch_end(self, metrics: EpochMetrics) -> None:
        raise RuntimeError("chart went away")


def _linear_data(n: int = 100):
    generator = torch.Generator().manual_seed(0)
    inputs = torch.rand(n, 1, generator=generator)
    labels = 1.0 - 0.8 * inputs
    return inputs, labels


def test_fifty_epochs_emit_fifty_ordered_events() -> None:
    torch.manual_seed(0)
    inputs, labels = _linear_data(100)
    callback = RecordingCallback()
    config = TrainingConfig(batch_size=32, epochs=50, seed=0, progress=False)
    history = train(build_model(), inputs, labels, config, callbacks=[callback])

    assert callback.began == 1
    assert len(callback.events) == 50
    assert [event.epoch for event in callback.events] == list(range(50))
    assert all(event.loss >= 0.0 and event.mse >= 0.0 for event in callback.events)
    assert callback.finished is history
    assert len(history) == 50
    assert history.records == callback.events


def test_adam_training_reduces_loss() -> None:
    torch.manual_seed(1)
    inputs, labels = _linear_data(200)
    config = TrainingConfig(learning_rate=0.05, epochs=40, seed=1, progress=False)
    history = train(build_model(), inputs, labels, config)
    assert history.loss[-1] < history.loss[0]
    assert history.mse[-1] < 0.02


def test_mse_loss_matches_mse_metric() -> None:
    inputs, labels = _linear_data(50)
    history = train(build_model(), inputs, labels, TrainingConfig(epochs=3, progress=False))
    assert history.loss == pytest.approx(history.mse)


def test_partial_final_batch_counts_every_example() -> None:
    inputs, labels = _linear_data(70)
    trainer = RegressionTrainer(
        build_model(),
        inputs,
        labels,
        TrainingConfig(batch_size=32, epochs=1, progress=False),
    )
    batch_sizes = [batch[0].size(0) for batch in trainer.train_loader]
    assert batch_sizes == [32, 32, 6]
    trainer.train()
    assert trainer.step == 3


def test_failing_observer_does_not_stop_training() -> None:
    inputs, labels = _linear_data(20)
    recorder = RecordingCallback()
    with pytest.warns(RuntimeWarning, match="chart went away"):
        history = train(
            build_model(),
            inputs,
            labels,
            TrainingConfig(epochs=2, progress=False),
            callbacks=[ExplodingCallback(), recorder],
        )
    assert len(history) == 2
    assert len(recorder.events) == 2


def test_non_finite_loss_warns_without_aborting() -> None:
    inputs, labels = _linear_data(10)
    labels = labels.clone()
    labels[0, 0] = float("nan")
    with pytest.warns(ConvergenceWarning):
        history = train(build_model(), inputs, labels, TrainingConfig(epochs=2, progress=False))
    assert len(history) == 2


def test_framework_failure_is_wrapped() -> None:
    inputs = torch.rand(8, 3)
    labels = torch.rand(8, 1)
    with pytest.raises(FrameworkError):
        train(build_model(), inputs, labels, TrainingConfig(epochs=1, progress=False))


def test_invalid_inputs_and_config() -> None:
    with pytest.raises(ValueError):
        train(build_model(), torch.rand(4, 1), torch.rand(3, 1))
    with pytest.raises(ValueError):
        train(build_model(), torch.rand(0, 1), torch.rand(0, 1))
    with pytest.raises(ValueError):
        TrainingConfig(batch_size=0)
    with pytest.raises(ValueError):
        TrainingConfig(optimizer="rmsprop")
    with pytest.raises(ValueError):
        TrainingConfig(loss="huber")


def test_predict_returns_original_units() -> None:
    model = nn.Sequential(nn.Linear(1, 1), nn.Linear(1, 1))
    with torch.no_grad():
        model[0].weight.fill_(1.0)
        model[0].bias.zero_()
        model[1].weight.fill_(-1.0)
        model[1].bias.fill_(1.0)
    input_bounds = NormalizationBounds(min=50.0, max=250.0)
    label_bounds = NormalizationBounds(min=10.0, max=40.0)
    predicted = predict(model, [50.0, 150.0, 250.0], input_bounds, label_bounds)
    assert predicted.tolist() == pytest.approx([40.0, 25.0, 10.0])

    horsepower, curve = regression_line(model, input_bounds, label_bounds, num_points=5)
    assert horsepower.tolist() == pytest.approx([50.0, 100.0, 150.0, 200.0, 250.0])
    assert curve.shape == (5,)
