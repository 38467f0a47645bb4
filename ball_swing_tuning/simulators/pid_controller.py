"""
PIDController - ボール位置制御用のPID制御器

ボール位置の測定値から、傾斜台の傾斜変化量（補正値）を生成する。

制御則:
    error = target - measurement
    integral += error * dt          （±integral_limit に制限）
    derivative = (error - last_error) / dt
    correction = Kp * error + Ki * integral + Kd * derivative

制御器は実行ごとに新しく生成し、積分値や前回誤差を実行間で共有しない。
"""

from abc import ABC, abstractmethod
from typing import Callable


class BaseController(ABC):
    """
    制御器の抽象基底クラス

    シミュレーションはこのインターフェースのみを使う。
    テストでは固定値やスクリプト化された補正値を返すスタブに差し替えられる。
    """

    dt: float = 1.0
    target: float = 0.0

    def set_target(self, target: float):
        """目標値を設定"""
        self.target = target

    @abstractmethod
    def update(self, measurement: float) -> float:
        """
        測定値から補正値を計算

        Args:
            measurement: 現在の測定値（ボール位置）

        Returns:
            補正値（傾斜変化量 [rad]）
        """
        pass


class PIDController(BaseController):
    """
    PID制御器（固定時間刻み）

    Attributes:
        k_p, k_i, k_d: 制御ゲイン（実行中は不変）
        dt: 時間刻み。0 の場合は 1 として扱う
        integral_limit: 積分項の上限（アンチワインドアップ）。0 以下で無効
        integral: 誤差の積分値
        last_error: 前回の誤差
    """

    def __init__(
        self,
        k_p: float = 1.0,
        k_i: float = 0.0,
        k_d: float = 0.0,
        dt: float = 0.0,
        integral_limit: float = 0.0,
    ):
        """
        Args:
            k_p: 比例ゲイン
            k_i: 積分ゲイン
            k_d: 微分ゲイン
            dt: 時間刻み [tick]
            integral_limit: 積分値の上限
        """
        self.k_p = k_p
        self.k_i = k_i
        self.k_d = k_d
        self.dt = dt
        self.integral_limit = integral_limit
        self.target = 0.0
        self.integral = 0.0
        self.last_error = 0.0

    def reset(self):
        """積分値と前回誤差をクリア"""
        self.integral = 0.0
        self.last_error = 0.0

    def update(self, measurement: float) -> float:
        dt = self.dt if self.dt else 1.0

        error = self.target - measurement
        self.integral = self.integral + error * dt

        # アンチワインドアップ（積分値の制限）
        if self.integral_limit > 0 and abs(self.integral) > self.integral_limit:
            self.integral = self.integral_limit if self.integral > 0 else -self.integral_limit

        derivative = (error - self.last_error) / dt
        self.last_error = error

        return (self.k_p * error) + (self.k_i * self.integral) + (self.k_d * derivative)


ControllerFactory = Callable[..., BaseController]


def create_pid_controller(
    k_p: float,
    k_i: float,
    k_d: float,
    dt: float,
    integral_limit: float,
) -> BaseController:
    """
    デフォルトの制御器ファクトリ

    Args:
        k_p, k_i, k_d: 制御ゲイン
        dt: 時間刻み [tick]
        integral_limit: 積分値の上限

    Returns:
        新しい PIDController
    """
    return PIDController(k_p=k_p, k_i=k_i, k_d=k_d, dt=dt, integral_limit=integral_limit)
