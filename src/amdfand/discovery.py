"""Find the cards whose fans this daemon can control."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import HwMonOpenError, InvalidCardError
from .hw_mon import ROOT_DIR, HwMon, open_hw_mon
from .identifiers import Card

logger = logging.getLogger(__name__)


def read_cards(root: Union[str, Path] = ROOT_DIR) -> List[Card]:
    """Read all graphics cards from the direct rendering manager.

    Entries that are not ``card<N>`` (connectors such as card0-DP-1,
    render nodes, the version file) are skipped. Cards are returned in
    directory listing order, which is not sorted.

    Raises:
        OSError: The DRM directory cannot be listed
    """
    cards = []
    for entry in Path(root).iterdir():
        try:
            cards.append(Card.parse(entry.name))
        except InvalidCardError:
            logger.debug("Skipping %s, not a card", entry.name)
    return cards


def hw_mons(
    cards: Optional[Iterable[Card]] = None,
    filter_amd: bool = True,
    root: Union[str, Path] = ROOT_DIR,
) -> List[HwMon]:
    """Open hardware monitors and keep the ones this daemon can drive.

    A card whose monitor cannot be opened is logged and left out; the
    other cards are still processed. With filter_amd, a monitor is kept
    only when the card vendor is AMD and the hwmon reports the amdgpu
    driver. Both checks are logged for every card.

    Args:
        cards: Cards to open, read_cards(root) when None
        filter_amd: Drop cards that are not driven by amdgpu
        root: DRM class directory

    Returns:
        Monitors in the order of the given cards

    Raises:
        OSError: cards is None and the DRM directory cannot be listed
    """
    if cards is None:
        cards = read_cards(root)

    monitors = []
    for card in cards:
        logger.info("opening hw mon for %s", card)
        try:
            hw_mon = open_hw_mon(card, root)
        except HwMonOpenError as e:
            logger.warning("Skipping %s: %s", card, e)
            continue

        if filter_amd:
            logger.info("is vendor ok for %s? %s", card, hw_mon.is_amd)
            logger.info("is hwmon name ok for %s? %s", card, hw_mon.name_is_amd)
            if not (hw_mon.is_amd and hw_mon.name_is_amd):
                continue

        monitors.append(hw_mon)
    return monitors
