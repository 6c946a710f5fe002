"""Example 2: f(a) = (a + 1) / 8.

Division is not an addition or multiplication, so the quotient is hinted
and then checked by multiplying it back.
"""

import cgl
from cgl import hints

builder = cgl.Builder()
a = builder.init(name="a")
one = builder.constant(1)
b = builder.add(a, one, name="b")

c = builder.hint([b], hints.div_by(8), name="c")
eight = builder.constant(8)
c_times_8 = builder.mul(c, eight)
builder.assert_equal(b, c_times_8)

if __name__ == "__main__":
    builder.fill_nodes([7])
    result = builder.check_constraints()
    print(f"c = {builder.value(c)}, constraints hold: {bool(result)}")
