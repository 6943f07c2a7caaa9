"""ERFA implementation of EphemerisProvider.

Uses ``erfa.plan94`` (Simon et al. 1994 analytical planetary theory),
which needs no kernel files or network access. Accuracy is a few
arcseconds within 1000-3000 AD and degrades gracefully outside it, which
is ample for display positions.
"""

import logging
import warnings
from datetime import datetime

import erfa
import numpy as np

from ephemeris_cache.bodies import PLANET_ORDER
from ephemeris_cache.entities import HelioVector
from ephemeris_cache.validation import to_epoch_ms

logger = logging.getLogger(__name__)

# plan94 planet numbers: 1 = Mercury ... 8 = Neptune (3 = Earth-Moon barycentre)
PLAN94_BODY_NUMBERS: dict[str, int] = {name: i + 1 for i, name in enumerate(PLANET_ORDER)}

UNIX_EPOCH_JD = 2440587.5
MS_PER_DAY = 86_400_000.0


class ErfaEphemerisProvider:
    """Heliocentric planet positions from PyERFA.

    The instant's UTC Julian date is used as an approximation of TDB; the
    ~70 s difference is far below display resolution.
    """

    name = "erfa-plan94"

    @classmethod
    def create(cls) -> "ErfaEphemerisProvider":
        """Factory method for symmetry with other providers."""
        return cls()

    def compute_helio_vector(self, body: str, instant: datetime) -> HelioVector:
        """Compute the J2000 equatorial heliocentric position of a planet.

        Args:
            body: Planet name from PLANET_ORDER
            instant: Aware UTC datetime

        Returns:
            HelioVector in AU

        Raises:
            KeyError: If the body has no plan94 theory
            erfa.ErfaError: If ERFA rejects the request
        """
        number = PLAN94_BODY_NUMBERS[body]
        # Split the JD so the fractional day keeps full precision
        date1 = UNIX_EPOCH_JD
        date2 = to_epoch_ms(instant) / MS_PER_DAY

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", erfa.ErfaWarning)
            pv = erfa.plan94(date1, date2, number)
        for warning in caught:
            logger.debug("plan94 %s at %s: %s", body, instant.isoformat(), warning.message)

        p = np.asarray(pv["p"], dtype=float)
        return HelioVector(x=float(p[0]), y=float(p[1]), z=float(p[2]), t=instant)

    def is_available(self) -> bool:
        try:
            pv = erfa.plan94(UNIX_EPOCH_JD, 0.0, PLAN94_BODY_NUMBERS["Earth"])
        except Exception:
            logger.exception("ERFA plan94 health check failed")
            return False
        return bool(np.all(np.isfinite(pv["p"])))
