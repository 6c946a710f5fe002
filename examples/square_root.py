"""Example 3: f(x) = sqrt(x + 7).

The root is hinted and checked by squaring it. The check only passes when
x + 7 is a perfect square (x = 2, 9, 18, ...).
"""

import sys

import cgl
from cgl import hints

builder = cgl.Builder()
x = builder.init(name="x")
seven = builder.constant(7)
x_plus_7 = builder.add(x, seven)

root = builder.hint([x_plus_7], hints.isqrt, name="root")
computed_sq = builder.mul(root, root)
builder.assert_equal(computed_sq, x_plus_7)

if __name__ == "__main__":
    value = int(sys.argv[1]) if len(sys.argv) > 1 else 9
    builder.fill_nodes([value])
    result = builder.check_constraints()
    print(f"root = {builder.value(root)}")
    for failure in result.failures:
        print(failure.describe())
    sys.exit(0 if result else 1)
