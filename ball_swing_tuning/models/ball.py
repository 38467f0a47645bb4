"""
Ball - 傾斜台上のボール

台の傾きから重力の接線方向成分を求め、1ティック分の移動量を計算する。

物理モデル:
    F = m * g * sin(α)
    a = F / m
    d = a * dt² / 2   （各ティックで静止状態から等加速度運動すると仮定）

速度は積算せず、毎ティック瞬時の傾きだけから変位を再計算する。
speed = d / dt はティック内の平均速度であり、静定判定に使う。
"""

import math

from .swing import Swing

GRAVITY = 9.81  # 重力加速度


class Ball:
    """
    ボールモデル

    Attributes:
        swing: 乗っている傾斜台（参照のみ）
        position: 台の中心からの符号付き位置
        size: 直径
        mass: 質量（合力の計算で打ち消されるが構造上保持する）
        speed: 直近ティックの平均速度
    """

    def __init__(
        self,
        swing: Swing,
        position: float = 0.0,
        size: float = 10.0,
        mass: float = 10.0,
        gravity: float = GRAVITY,
    ):
        """
        Args:
            swing: 乗る傾斜台
            position: 初期位置
            size: ボールの直径
            mass: ボールの質量
            gravity: 重力加速度
        """
        self.swing = swing
        self.position = position
        self.size = size
        self.mass = mass
        self.gravity = gravity
        self.speed = 0.0

    @property
    def end_stop(self) -> float:
        """中心から端のストッパーまでの距離（ボール半径を除く）"""
        return self.swing.length / 2 - self.size / 2

    def calculate_speed_and_position(self, dt: float = 1.0):
        """
        1ティック分の位置と速度を更新

        端のストッパーを越えた場合は位置をストッパーに固定し、
        速度を0にする（非弾性衝突）。

        Args:
            dt: 時間刻み [tick]

        Raises:
            ZeroDivisionError: mass または dt が0の場合
        """
        force = self.mass * self.gravity * math.sin(self.swing.angle)
        acceleration = force / self.mass
        distance = (acceleration * dt**2) / 2
        self.position = self.position + distance

        if abs(self.position) > self.end_stop:
            self.position = math.copysign(self.end_stop, self.position)
            self.speed = 0.0
        else:
            self.speed = distance / dt

    def is_centered(self, sigma: float = 1e-5) -> bool:
        """
        中心で静止しているか判定

        位置と速度の両方が sigma 未満の場合のみ True。
        中心を通過中（速度が大きい）の場合は False。
        """
        return abs(self.speed) < sigma and abs(self.position) < sigma
