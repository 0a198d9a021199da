import logging
from typing import Iterable, Optional

import numpy as np

from psd_layers.constants import PACKED_CHANNELS, ChannelID
from psd_layers.exceptions import UNSUPPORTED_CHANNEL_KIND, DecodeWarning
from psd_layers.psd.layer_and_mask import ChannelData, LayerRecord

logger = logging.getLogger(__name__)


def composite_layer(
    pixels: np.ndarray,
    width: int,
    height: int,
    record: LayerRecord,
    channels: Iterable[ChannelData],
    layer_index: Optional[int] = None,
) -> list[DecodeWarning]:
    """
    OR every supported channel of `record` into the canvas-sized `pixels`.

    Channel bytes are laid out row by row within the record's bounding box;
    the first row is written to canvas row ``bottom - 1`` and each following
    row one above the previous. Bytes that fall outside the canvas are
    dropped.

    :param pixels: flat ``uint32`` buffer of ``width * height`` entries,
        updated in place.
    :return: warnings for channels that were skipped.
    """
    warnings = []
    for info, channel in zip(record.channel_info, channels):
        if info.id not in PACKED_CHANNELS:
            message = "Unsupported channel kind %d, ignoring" % info.id
            logger.warning("%s (layer %r)" % (message, record.name))
            warnings.append(
                DecodeWarning(
                    UNSUPPORTED_CHANNEL_KIND,
                    message,
                    layer_index=layer_index,
                    channel_id=info.id,
                )
            )
            continue
        composite_channel(
            pixels, width, height, record, channel.data, ChannelID(info.id).shift
        )
    return warnings


def composite_channel(
    pixels: np.ndarray,
    width: int,
    height: int,
    record: LayerRecord,
    data: bytes,
    shift: int,
) -> None:
    """OR one channel, shifted into its packed slot, into `pixels`."""
    if not data:
        return

    # Flip so that row k of the block lands on canvas row top + k.
    block = np.frombuffer(data, dtype=np.uint8).reshape(
        (record.height, record.width)
    )[::-1]

    x0, x1 = max(record.left, 0), min(record.right, width)
    y0, y1 = max(record.top, 0), min(record.bottom, height)
    if x0 >= x1 or y0 >= y1:
        logger.debug("layer %r lies outside the canvas" % record.name)
        return

    canvas = pixels.reshape((height, width))
    clipped = block[y0 - record.top : y1 - record.top, x0 - record.left : x1 - record.left]
    canvas[y0:y1, x0:x1] |= clipped.astype(np.uint32) << np.uint32(shift)
