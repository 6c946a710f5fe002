"""Example 1: f(x) = x^2 + x + 5.

Only additions and multiplications, so no hint is needed.
"""

import cgl

builder = cgl.Builder()
x = builder.init(name="x")
x_squared = builder.mul(x, x)
x_squared_plus_x = builder.add(x_squared, x)
five = builder.constant(5)
y = builder.add(x_squared_plus_x, five, name="y")

if __name__ == "__main__":
    report = builder.fill_nodes([3])
    print(f"y = {builder.value(y)} after {report.passes} passes")
    print(f"constraints hold: {bool(builder.check_constraints())}")
