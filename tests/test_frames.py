import numpy as np
import pandas as pd
import pytest

from synchronised_distance.frames import dataset_from_frame, dataset_to_frame, matrix_to_frame, save_dataframe
from synchronised_distance.model import Position


def _points():
    return pd.DataFrame(
        {
            "trajectory_id": ["b", "a", "b", "a"],
            "timestamp": [10, 0, 0, 5],
            "x": [1.0, 0.0, 0.0, 2.0],
            "y": [1.0, 0.0, 0.0, 2.0],
        }
    )


def test_dataset_from_frame_keeps_first_appearance_order():
    dataset = dataset_from_frame(_points())
    assert dataset.ids() == ["b", "a"]
    assert dataset.trajectories[0].timestamps() == [0, 10]
    assert dataset.trajectories[1].position_at(5) == Position(2.0, 2.0)


def test_dataset_from_frame_custom_columns():
    df = _points().rename(columns={"trajectory_id": "flight_id", "x": "x_utm", "y": "y_utm"})
    dataset = dataset_from_frame(df, id_col="flight_id", x_col="x_utm", y_col="y_utm")
    assert dataset.size() == 2


def test_dataset_from_frame_missing_columns():
    with pytest.raises(ValueError, match="Missing required columns"):
        dataset_from_frame(_points().drop(columns=["y"]))


def test_dataset_from_frame_duplicate_samples():
    df = pd.concat([_points(), _points().iloc[[0]]], ignore_index=True)
    with pytest.raises(ValueError, match="Duplicate sample"):
        dataset_from_frame(df)


def test_dataset_to_frame_is_sorted_per_trajectory():
    df = dataset_to_frame(dataset_from_frame(_points()))
    assert df["trajectory_id"].tolist() == ["b", "b", "a", "a"]
    assert df["timestamp"].tolist() == [0, 10, 0, 5]


def test_matrix_to_frame_labels_axes(tmp_path):
    frame = matrix_to_frame(np.array([[0.0, 1.5], [1.5, 0.0]]), ["a", "b"])
    assert frame.loc["a", "b"] == 1.5
    path = tmp_path / "out" / "matrix.csv"
    save_dataframe(frame, path, index=True)
    assert path.exists()
    with pytest.raises(ValueError):
        matrix_to_frame(np.zeros((2, 2)), ["a"])


def test_dataset_from_frame_rejects_fractional_timestamps():
    df = _points()
    df["timestamp"] = [10.0, 0.0, 0.0, 5.7]
    with pytest.raises(ValueError, match="must be integers"):
        dataset_from_frame(df)


def test_dataset_from_frame_accepts_integral_floats():
    df = _points()
    df["timestamp"] = df["timestamp"].astype(float)
    assert dataset_from_frame(df).trajectories[1].timestamps() == [0, 5]
