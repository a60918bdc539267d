# 选牌状态模块
from .selection import CardSelection
