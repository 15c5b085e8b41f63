from liftcore.models import ForceRelation, Sensation


def clamp(value, lo, hi):
    return min(hi, max(lo, value))


def normal_force(m, g, a):
    """바닥이 탑승자를 미는 힘 F_N = m(g + a). 음수 보정 없음."""
    return m * (g + a)


def get_force_relation(fn, fg):
    """
    F_N 과 F_g 비교 (허용 오차 밴드 포함)

    Args:
        fn (float): 수직항력 (N)
        fg (float): 중력 (N)

    Returns:
        ForceRelation: gt / lt / eq
    """
    # F_g 의 2%, 0 근처에서는 최소 0.5 N
    tol = max(0.02 * fg, 0.5)
    if fn > fg + tol:
        return ForceRelation.GT
    if fn < fg - tol:
        return ForceRelation.LT
    return ForceRelation.EQ


def derive_sensation(fn, fg):
    relation = get_force_relation(fn, fg)
    if relation is ForceRelation.GT:
        return Sensation.HEAVIER
    if relation is ForceRelation.LT:
        return Sensation.LIGHTER
    if relation is ForceRelation.EQ:
        return Sensation.NORMAL
    raise ValueError(f"Unknown force relation: {relation}")
