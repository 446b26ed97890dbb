# # Demo

# A value walks into a mirror.

from bizarro import bizarro

bizarro("abc")

# It comes out the other side backwards. Numbers come out negative, and the truth comes out a lie.

bizarro(1), bizarro(-2.5), bizarro(True)

# Nothing inspected the value with a chain of `if isinstance(...)` tests, though. `bizarro` is a generic function: it looks at the type of its argument and hands it to the implementation registered for that type.

bizarro.registry.keys()

# `bool` is a subclass of `int`, but the mirror knows better than to multiply a boolean by minus one. The most specific registration wins.

assert bizarro(True) is False

# Whole vectors pass through at once, one element at a time, each according to its kind.

bizarro([True, False, "stressed", 3])

# numpy arrays are flipped by dtype.

import numpy as np

bizarro(np.array(["ab", "cde"])), bizarro(np.arange(3))

# ## Factors
#
# A factor is a vector whose elements are restricted to a fixed, ordered set of labels. The labels live once, in `levels`, and each element is an index into them.

from bizarro import factor

f = factor(["abc", "def", "abc"], levels=["abc", "def"])
f

# In the mirror, each label is itself flipped, and the declared order of the labels runs backwards.

bizarro(f)

assert bizarro(f) == factor(["cba", "fed", "cba"], levels=["fed", "cba"])

# ## Tables
#
# A table is an ordered mapping of column names to columns of equal length. The mirror turns every column around, and the names too.

from bizarro import Table

t = Table({"ab": [1, 2], "cd": ["xy", "z"], "ef": factor(["u", "v"])})
bizarro(t).names

assert bizarro(t).names == bizarro(t.names)

# Look twice and everything is back where it started.

assert bizarro(bizarro(t)) == t

# Tables trade places with `xarray` datasets, and the mirror works on those too.

ds = t.to_dataset()
bizarro(ds)

# ## Strangers
#
# Some things have no reflection.

from bizarro import UnsupportedCategory


class Vampire:
    pass


try:
    bizarro(Vampire())
except UnsupportedCategory as e:
    print(e)

# But the mirror can be taught. Register an implementation for the new type, and the generic function picks it up, no edits to `bizarro` itself required.

from attrs import define

from bizarro import register


@define
class Point:
    x: float
    y: float


@register(Point)
def _(p):
    return Point(bizarro(p.x), bizarro(p.y))


bizarro([Point(1.0, 2.0), Point(0.0, -3.0)])
