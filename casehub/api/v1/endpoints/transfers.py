"""Transfer API: provenance facts for a dossier of a world the caller can access.

The dossier must belong to the world in the path; a dossier of another
world is reported as not found.
"""

from fastapi import APIRouter, Depends

from casehub.api.v1.dependencies import get_transfer_ledger, require_dossier_in_world
from casehub.application.dtos.dossier import DossierResult
from casehub.application.services.transfer_ledger import TransferLedger
from casehub.schemas.transfer import TransferRecordResponse, TransferViewResponse

router = APIRouter()


@router.get(
    "/{world_code}/dossiers/{dossier_id}/transfers",
    response_model=TransferViewResponse,
    responses={
        404: {"description": "Dossier not found in this world"},
        503: {"description": "Transfer history could not be retrieved"},
    },
)
async def classify_dossier_transfers(
    dossier: DossierResult = Depends(require_dossier_in_world),
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    """Return incoming/outgoing flags and the most recent transfer in each direction.

    An empty view means no completed transfer; a 503 means history is unknown.
    """
    view = await ledger.classify(dossier.id)
    return TransferViewResponse.from_view(view)


@router.get(
    "/{world_code}/dossiers/{dossier_id}/transfers/history",
    response_model=list[TransferRecordResponse],
    responses={404: {"description": "Dossier not found in this world"}},
)
async def list_dossier_transfers(
    dossier: DossierResult = Depends(require_dossier_in_world),
    ledger: TransferLedger = Depends(get_transfer_ledger),
):
    """Return the dossier's completed transfers, newest first."""
    transfers = await ledger.history(dossier.id)
    return [TransferRecordResponse.from_entity(t) for t in transfers]
