"""Top‑level package for the checkout demo.

The domain lives in :mod:`products`, :mod:`customer`, :mod:`cart` and
:mod:`shipping`; :mod:`checkout` ties them together and :mod:`cli` runs
the reference scenarios.
"""
