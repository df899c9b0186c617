"""
Capability string constants for pydense backends.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pydense.core.capabilities import CAPABILITY_GEMM

    if backend.supports(CAPABILITY_GEMM):
        backend.gemm(...)
"""

# y <- alpha * x + y
CAPABILITY_AXPY = 'axpy'

# x <- alpha * x
CAPABILITY_SCAL = 'scal'

# C <- alpha * A * B + beta * C
CAPABILITY_GEMM = 'gemm'

# Out-of-place matrix transpose
CAPABILITY_TRANSPOSE = 'transpose'

# LU factorization with partial pivoting
CAPABILITY_GETRF = 'getrf'

# Inverse from an LU factorization
CAPABILITY_GETRI = 'getri'

# General real eigensolver with workspace query
CAPABILITY_GEEV = 'geev'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_AXPY,
    CAPABILITY_SCAL,
    CAPABILITY_GEMM,
    CAPABILITY_TRANSPOSE,
    CAPABILITY_GETRF,
    CAPABILITY_GETRI,
    CAPABILITY_GEEV,
})

__all__ = [
    'CAPABILITY_AXPY',
    'CAPABILITY_SCAL',
    'CAPABILITY_GEMM',
    'CAPABILITY_TRANSPOSE',
    'CAPABILITY_GETRF',
    'CAPABILITY_GETRI',
    'CAPABILITY_GEEV',
    'ALL_CAPABILITIES',
]
