def test_imports_smoke():
    import numpy as np
    import pandas as pd

    import categorizer
    import stc_core
    import stc_utils

    # sanity
    assert np.array([1, 2, 3]).sum() == 6
    assert pd.DataFrame({"a": [1]}).shape == (1, 1)
    assert "TransactionCategorizer" in categorizer.__all__
    assert stc_core.NotTrainedError.__mro__[1] is RuntimeError
    assert stc_utils.__doc__
