"""
Asset endpoints.
Each route validates its required fields and forwards one chaincode
transaction through the asset service.
"""

from fastapi import APIRouter, Body

from app.dependencies import Assets, QueryIdentity
from app.schemas.asset import AssetCreate, AssetDelete, AssetTransfer, AssetUpdate, MessageResponse
from app.schemas.error import ErrorResponse, ValidationErrorResponse

router = APIRouter(
    responses={
        400: {"model": ValidationErrorResponse, "description": "Missing required fields"},
        500: {"model": ErrorResponse, "description": "Ledger or credential failure"},
    },
)


@router.post("", response_model=MessageResponse)
async def create_asset(data: AssetCreate, assets: Assets):
    """
    Create a new asset.
    Submits CreateAsset(assetID, color, size, owner, appraisedValue).
    """
    message = await assets.create_asset(data)
    return MessageResponse(message=message)


@router.put("/{asset_id}", response_model=MessageResponse)
async def update_asset(asset_id: str, data: AssetUpdate, assets: Assets):
    """
    Replace an asset's attributes.
    Submits UpdateAsset(id, color, size, owner, appraisedValue).
    """
    message = await assets.update_asset(asset_id, data)
    return MessageResponse(message=message)


@router.post("/{asset_id}/transfer", response_model=MessageResponse)
async def transfer_asset(asset_id: str, data: AssetTransfer, assets: Assets):
    """Submits TransferAsset(id, newOwner)."""
    message = await assets.transfer_asset(asset_id, data)
    return MessageResponse(message=message)


@router.get("/{asset_id}/history")
async def get_asset_history(asset_id: str, caller: QueryIdentity, assets: Assets):
    """
    Get the modification history of an asset.
    Evaluates GetAssetHistory(id); entries keep the ledger's order.
    """
    return await assets.get_asset_history(asset_id, caller)


@router.delete("/{asset_id}", response_model=MessageResponse)
async def delete_asset(asset_id: str, assets: Assets, caller: AssetDelete = Body(...)):
    """
    Delete an asset.
    The caller identity is read from the JSON body.
    """
    message = await assets.delete_asset(asset_id, caller)
    return MessageResponse(message=message)


@router.get("/{asset_id}")
async def read_asset(asset_id: str, caller: QueryIdentity, assets: Assets):
    """Evaluates ReadAsset(id) and returns the ledger's JSON unchanged."""
    return await assets.read_asset(asset_id, caller)
