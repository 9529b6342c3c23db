from __future__ import annotations

from pathlib import Path

from anchorpy import Idl, Program, Provider
from anchorpy.error import IdlNotFoundError
from solders.pubkey import Pubkey

from ..errors import FetchError
from ..logger import get_logger

logger = get_logger(__name__)


def load_idl(path: str | Path) -> Idl:
    """Load an Anchor IDL from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    p = Path(path)
    with p.open() as f:
        return Idl.from_json(f.read())


async def build_program(
    program_id: Pubkey, provider: Provider, idl_path: str | Path | None = None
) -> Program:
    """Build the structured product program client.

    Uses the IDL at ``idl_path`` when given, otherwise fetches the IDL
    account the program published on-chain.

    Raises:
        FetchError: If no IDL is published for ``program_id``.
    """
    if idl_path is not None:
        logger.debug("Loading structured product IDL from %s", idl_path)
        return Program(load_idl(idl_path), program_id, provider)

    logger.debug("Fetching structured product IDL for program %s", program_id)
    try:
        return await Program.at(program_id, provider)
    except IdlNotFoundError as exc:
        raise FetchError(
            f"No IDL published on-chain for program {program_id}; set idl_path"
        ) from exc
