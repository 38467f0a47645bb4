"""
Swing - 傾斜可能なシーソー台

ボールが乗る台の傾き角と、その物理的・幾何的な制限を保持する。
1ティックあたりの傾斜変化量（角速度の上限）と、機械的な最大傾斜角の
2段階で飽和させる。
"""

import math


class Swing:
    """
    傾斜台モデル

    Attributes:
        angle: 現在の傾き [rad]
        min_angle, max_angle: 機械的な傾斜限界 [rad]
        min_delta, max_delta: 1ティックあたりの傾斜変化の限界 [rad]
        length: 台の全長（左右合計）
    """

    def __init__(
        self,
        angle: float = 0.0,
        length: float = 200.0,
        max_angle: float = math.pi / 4,
        max_delta: float = math.pi / 36,
    ):
        """
        Args:
            angle: 初期傾き [rad]
            length: 台の全長（左右合計）
            max_angle: 左右それぞれの最大傾斜角 [rad]
            max_delta: 傾斜変化量の幅 [rad]（±max_delta/2 に制限）
        """
        self.angle = angle
        self.min_angle = -max_angle
        self.max_angle = max_angle
        self.min_delta = -(max_delta / 2)
        self.max_delta = max_delta / 2
        self.length = length

    def tilt(self, delta: float):
        """
        台を delta だけ傾ける

        delta を [min_delta, max_delta] に、結果の角度を
        [min_angle, max_angle] に制限する。エラーは発生しない。

        Args:
            delta: 傾斜変化量 [rad]
        """
        delta = min(delta, self.max_delta)
        delta = max(delta, self.min_delta)

        self.angle += delta

        self.angle = min(self.angle, self.max_angle)
        self.angle = max(self.angle, self.min_angle)
