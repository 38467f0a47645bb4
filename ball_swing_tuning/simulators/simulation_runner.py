"""
SimulationRunner - 閉ループシミュレーションの実行器

傾斜台・ボール・制御器を毎回新しく生成して接続し、最大 max_ticks ティック
実行する。ボールが最初に中心で静止したティック番号（0始まり）を返し、
予算内に静止しなかった場合は None を返す。

1ティックの処理順:
    1. ボールの物理状態を dt = controller.dt で更新
    2. ボール位置を制御器に入力して補正値を取得
    3. 補正値を傾斜変化量として台に適用
    4. 静定判定

外部状態を持たないため、同じゲインでの実行は常に同じ結果になる。
"""

import math
from typing import Optional

from ..config.parameters import BallParams, ControlParams, RunnerParams, SwingParams
from ..models import Ball, Swing
from .data_collector import TraceCollector
from .pid_controller import ControllerFactory, create_pid_controller


class SimulationRunner:
    """
    ゲイン評価用のシミュレーション実行器

    探索アルゴリズムはこのオブジェクトを適合度オラクルとして使う。
    ProcessPoolExecutor に渡せるよう、パラメータとモジュールレベルの
    ファクトリのみを保持する。
    """

    def __init__(
        self,
        swing: Optional[SwingParams] = None,
        ball: Optional[BallParams] = None,
        control: Optional[ControlParams] = None,
        runner: Optional[RunnerParams] = None,
        controller_factory: ControllerFactory = create_pid_controller,
    ):
        """
        Args:
            swing: 傾斜台パラメータ（None の場合はデフォルト）
            ball: ボールパラメータ
            control: 制御パラメータ（dt, integral_limit, target_position を使用）
            runner: ティック予算と静定判定の閾値
            controller_factory: factory(k_p, k_i, k_d, dt, integral_limit) -> BaseController
        """
        self.swing_params = swing if swing is not None else SwingParams()
        self.ball_params = ball if ball is not None else BallParams()
        self.control_params = control if control is not None else ControlParams()
        self.runner_params = runner if runner is not None else RunnerParams()
        self.controller_factory = controller_factory

    @classmethod
    def from_parameters(cls, params, controller_factory: ControllerFactory = create_pid_controller):
        """TuningParameters から実行器を生成"""
        return cls(
            swing=params.swing,
            ball=params.ball,
            control=params.control,
            runner=params.runner,
            controller_factory=controller_factory,
        )

    def run(
        self,
        k_p: float,
        k_i: float = 0.0,
        k_d: float = 0.0,
        collector: Optional[TraceCollector] = None,
        verbose: bool = False,
    ) -> Optional[int]:
        """
        1回のシミュレーションを実行

        Args:
            k_p, k_i, k_d: 制御ゲイン
            collector: 各ティックの状態を記録する収集器（任意）
            verbose: 各ティックの状態を表示するか

        Returns:
            最初に静定したティック番号。静定しなかった場合は None
        """
        swing = Swing(
            angle=self.swing_params.initial_angle,
            length=self.swing_params.length,
            max_angle=self.swing_params.max_angle,
            max_delta=self.swing_params.max_delta,
        )
        ball = Ball(
            swing,
            position=self.ball_params.initial_position,
            size=self.ball_params.size,
            mass=self.ball_params.mass,
            gravity=self.ball_params.gravity,
        )

        controller = self.controller_factory(
            k_p,
            k_i,
            k_d,
            self.control_params.dt,
            self.control_params.integral_limit,
        )
        controller.set_target(self.control_params.target_position)

        sigma = self.runner_params.settle_sigma

        for tick in range(self.runner_params.max_ticks):
            ball.calculate_speed_and_position(controller.dt)
            correction = controller.update(ball.position)
            swing.tilt(correction)

            if collector is not None:
                collector.record(tick, ball.position, ball.speed, swing.angle, correction)

            if verbose:
                print(
                    f"[SimRunner] tick={tick}: x={ball.position:.6f}, V={ball.speed:.6f}, "
                    f"alpha={swing.angle * 180 / math.pi:.4f}deg, delta={correction:.6f}"
                )

            if ball.is_centered(sigma):
                if collector is not None:
                    collector.settled_tick = tick
                return tick

        return None

    def settles(self, k_p: float, k_i: float = 0.0, k_d: float = 0.0) -> bool:
        """指定ゲインで予算内に静定するか"""
        return self.run(k_p, k_i, k_d) is not None


def run_simulation(k_p: float, k_i: float = 0.0, k_d: float = 0.0, verbose: bool = False) -> Optional[int]:
    """
    デフォルト設定で1回のシミュレーションを実行

    Returns:
        最初に静定したティック番号。静定しなかった場合は None
    """
    return SimulationRunner().run(k_p, k_i, k_d, verbose=verbose)
