"""
Nichols-Form Frequency Response Toolkit

This package represents sampled frequency responses of SISO systems in
"Nichols form": each sample is packed as one complex number

    phase [deg] + j * magnitude [dB]

rather than the conventional real/imaginary or magnitude/phase pair. The
encoding turns a series (cascade) connection, a product of transfer
functions, into pointwise addition, which is the operation loop shaping on
a Nichols chart performs over and over.

Components
----------
- `nichols_codec`: complex <-> Nichols-form conversion
- `nichols_response`: the immutable ``NicholsResponse`` value and its
  named constructors
- `interpolation`: evaluation at arbitrary frequencies
- `unwrapper`: phase unwrapping and gauge fixing to (-360, 0] deg
- `series_composer`: cascade with responses, LTI systems and gains
- `lti_adapter`: python-control systems as frequency-response-like operands
- `data_logger`: JSON/CSV persistence

Usage Example
-------------
```python
import numpy as np
import control as ctrl
from nichols_response.core.frequency_response import NicholsResponse

w = np.logspace(-2, 2, 200)
P = NicholsResponse.from_polynomial([1], [1, 2, 0], w)    # 1/(s(s+2))
C = ctrl.tf([10, 10], [1, 20])                            # lead compensator
L = P.series(C).unwrap()
print(L.magnitude(1.0), L.phase(1.0))
```

Mathematical Foundation
-----------------------
For H(jω) = |H| e^{jφ}:

$$N = \\frac{180}{\\pi}\\varphi + j\\,20\\log_{10}|H|$$

and for a cascade H = A·B:

$$N_H = N_A + N_B$$
"""

__version__ = "1.0.0"

from .exceptions import (
    NicholsResponseError,
    ConstructionError,
    FrequencyMismatchError,
    UnsupportedOperandError,
    OutOfRangeError,
    InvalidArgumentError,
)

from .nichols_config import (
    NicholsConfig,
    DEFAULT_CONFIG,
    INTERPOLATION_KINDS,
)

from .nichols_codec import (
    complex_to_nichols,
    nichols_to_complex,
    pack_nichols,
    split_nichols,
    wrap_phase,
)

from .lti_adapter import (
    FrequencyResponseLike,
    LTIResponseAdapter,
    as_frequency_response_like,
)

from .nichols_response import NicholsResponse

from .interpolation import (
    evaluate,
    magnitude,
    phase,
)

from .unwrapper import (
    unwrap_phase,
    unwrap_response,
)

from .series_composer import (
    series,
    series_gain,
)

from .data_logger import (
    NicholsResponseLogger,
    LoggerConfig,
)

__all__ = [
    # Errors
    'NicholsResponseError',
    'ConstructionError',
    'FrequencyMismatchError',
    'UnsupportedOperandError',
    'OutOfRangeError',
    'InvalidArgumentError',
    # Configuration
    'NicholsConfig',
    'DEFAULT_CONFIG',
    'INTERPOLATION_KINDS',
    # Codec
    'complex_to_nichols',
    'nichols_to_complex',
    'pack_nichols',
    'split_nichols',
    'wrap_phase',
    # LTI interface
    'FrequencyResponseLike',
    'LTIResponseAdapter',
    'as_frequency_response_like',
    # Value
    'NicholsResponse',
    # Operations
    'evaluate',
    'magnitude',
    'phase',
    'unwrap_phase',
    'unwrap_response',
    'series',
    'series_gain',
    # Persistence
    'NicholsResponseLogger',
    'LoggerConfig',
]
