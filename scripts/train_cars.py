"""Train the horsepower -> MPG linear regression."""

from __future__ import annotations

import argparse
from dataclasses import asdict

import torch

from mpg_regression.data.cars import CARS_DATA_URL
from mpg_regression.models import LinearRegressionConfig, model_summary
from mpg_regression.pipeline import PipelineConfig, run_pipeline
from mpg_regression.training import EpochMetrics, TrainingCallback, TrainingConfig, regression_line


class PrintMetrics(TrainingCallback):
    def on_epoch_end(self, metrics: EpochMetrics) -> None:
        print(f"Epoch {metrics.epoch + 1}: loss={metrics.loss:.6f} mse={metrics.mse:.6f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train a linear regression of MPG on horsepower")
    parser.add_argument("--url", type=str, default=CARS_DATA_URL, help="Dataset URL")
    parser.add_argument("--data-path", type=str, default=None, help="Local copy of the dataset")
    parser.add_argument("--timeout", type=float, default=30.0)
    parser.add_argument("--hidden-units", type=int, default=1)
    parser.add_argument("--optimizer", type=str, default="adam", choices=["adam", "sgd"])
    parser.add_argument("--loss", type=str, default="mse", choices=["mse", "mae"])
    parser.add_argument("--lr", type=float, default=1e-3)
    parser.add_argument("--batch-size", type=int, default=32)
    parser.add_argument("--epochs", type=int, default=50)
    parser.add_argument("--no-shuffle", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--device", type=str, default=None)
    parser.add_argument("--no-progress", action="store_true")
    parser.add_argument("--plot", action="store_true", help="Show data and live training charts")
    parser.add_argument("--save-path", type=str, default=None)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = PipelineConfig(
        url=args.url,
        data_path=args.data_path,
        timeout=args.timeout,
        model=LinearRegressionConfig(hidden_units=args.hidden_units),
        training=TrainingConfig(
            optimizer=args.optimizer,
            learning_rate=args.lr,
            loss=args.loss,
            batch_size=args.batch_size,
            epochs=args.epochs,
            shuffle=not args.no_shuffle,
            seed=args.seed,
            device=args.device,
            progress=not args.no_progress,
        ),
    )

    callbacks: list[TrainingCallback] = [PrintMetrics()]
    on_records = None
    if args.plot:
        import matplotlib.pyplot as plt

        from mpg_regression.utils.visualization import LiveMetricsPlot, plot_predictions, plot_scatter

        plt.ion()
        callbacks.append(LiveMetricsPlot(pause=0.001))
        on_records = plot_scatter

    result = run_pipeline(config, callbacks=callbacks, on_records=on_records)
    print(f"Loaded {len(result.records)} complete records")
    print(model_summary(result.model))
    final = result.history.records[-1]
    print(f"Done training: loss={final.loss:.6f} mse={final.mse:.6f}")

    if args.plot:
        horsepower, predicted = regression_line(
            result.model,
            result.prepared.input_bounds,
            result.prepared.label_bounds,
        )
        plot_predictions(result.records, horsepower.tolist(), predicted.tolist())
        plt.ioff()
        plt.show()

    if args.save_path:
        checkpoint = {
            "config": asdict(config.model),
            "state_dict": result.model.state_dict(),
            "input_bounds": asdict(result.prepared.input_bounds),
            "label_bounds": asdict(result.prepared.label_bounds),
            "metadata": {
                "records": len(result.records),
                "epochs": config.training.epochs,
                "seed": args.seed,
            },
        }
        torch.save(checkpoint, args.save_path)
        print(f"Saved checkpoint to {args.save_path}")


if __name__ == "__main__":
    main()
