"""
TraceCollector - 単一実行のデータ収集器

シミュレーション中の各ティックの状態を収集し、HDF5形式で保存する。

収集データ:
- tick: ティック番号
- position, speed: ボールの状態
- angle: 傾斜台の傾き [rad]
- correction: 制御器の補正値（制限前）
"""

from pathlib import Path
from typing import Dict, List

import h5py
import numpy as np

TRACE_KEYS = ("tick", "position", "speed", "angle", "correction")


class TraceCollector:
    """
    データ収集器

    SimulationRunner から毎ティック record() が呼ばれる。
    """

    def __init__(self):
        self.data: Dict[str, List[float]] = {key: [] for key in TRACE_KEYS}
        self.settled_tick = None

    def __len__(self):
        return len(self.data["tick"])

    def record(self, tick: int, position: float, speed: float, angle: float, correction: float):
        """
        1ティック分のデータを記録

        Args:
            tick: ティック番号（0始まり）
            position: ボール位置
            speed: ボール速度
            angle: 傾斜台の傾き [rad]
            correction: 制御器の補正値
        """
        self.data["tick"].append(tick)
        self.data["position"].append(position)
        self.data["speed"].append(speed)
        self.data["angle"].append(angle)
        self.data["correction"].append(correction)

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """収集データを numpy 配列に変換"""
        arrays = {key: np.array(values, dtype=float) for key, values in self.data.items()}
        arrays["tick"] = np.array(self.data["tick"], dtype=int)
        return arrays

    def save_to_hdf5(self, output_dir: Path, filename: str = "trace_data.h5") -> Path:
        """
        収集データをHDF5ファイルに保存

        Args:
            output_dir: 出力ディレクトリ
            filename: ファイル名

        Returns:
            保存したファイルのパス
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        h5_path = output_dir / filename

        with h5py.File(h5_path, "w") as f:
            data_group = f.create_group("data")
            for key, values in self.to_arrays().items():
                data_group.create_dataset(key, data=values, compression="gzip")
            # 静定しなかった場合は -1
            f.attrs["settled_tick"] = -1 if self.settled_tick is None else self.settled_tick

        print(f"[TraceCollector] 📁 {len(self)} ticks saved to {h5_path}")
        return h5_path


def load_trace(h5_path: Path) -> dict:
    """
    HDF5ファイルからトレースを読み込む

    Returns:
        TRACE_KEYS と "settled_tick" をキーに持つ辞書
    """
    with h5py.File(h5_path, "r") as f:
        trace = {key: f["data"][key][:] for key in TRACE_KEYS}
        settled_tick = int(f.attrs["settled_tick"])
    trace["settled_tick"] = None if settled_tick < 0 else settled_tick
    return trace
