from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from .runner import ScriptExecutionError, ScriptRunner, get_script_runner
from .schemas import (
    DatabaseStatus,
    FeatureStatus,
    ManageFeatureRequest,
    ScriptResult,
    SwitchDbRequest,
)
from .service import CatalogNotEmptyError, DemoControlService, DemoPaths, get_demo_paths

router = APIRouter(prefix="/demo-control", tags=["demo-control"])

@router.get("/status", response_model=DatabaseStatus)
async def get_status(paths: DemoPaths = Depends(get_demo_paths)):
    return DemoControlService.read_status(paths)

@router.get("/feature-status/{feature_name}", response_model=FeatureStatus)
async def get_feature_status(feature_name: str, paths: DemoPaths = Depends(get_demo_paths)):
    return {
        "feature_name": feature_name,
        "is_applied": DemoControlService.is_feature_applied(paths),
    }

@router.post("/manage-feature", response_model=ScriptResult)
async def manage_feature(
    payload: ManageFeatureRequest,
    runner: ScriptRunner = Depends(get_script_runner),
    paths: DemoPaths = Depends(get_demo_paths)
):
    try:
        output = await DemoControlService.manage_feature(
            runner, paths, payload.action, payload.feature_name
        )
    except ScriptExecutionError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": f"Failed during file {payload.action} for '{payload.feature_name}'. Check logs.",
                "details": str(e),
                "output": e.output,
            },
        )
    return {
        "message": f"File {payload.action} sequence completed. Restart the servers to pick it up.",
        "output": output,
    }

@router.post("/switch-db", response_model=ScriptResult)
async def switch_db(
    payload: SwitchDbRequest,
    runner: ScriptRunner = Depends(get_script_runner),
    paths: DemoPaths = Depends(get_demo_paths)
):
    try:
        output = await DemoControlService.switch_db(
            runner, paths, payload.main_connection_string, payload.shadow_connection_string
        )
    except ScriptExecutionError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to execute switch-db script.", "details": str(e)},
        )
    return {
        "message": "Database connection strings update initiated. Restart backend required.",
        "output": output,
    }

@router.post("/run-seed", response_model=ScriptResult)
async def run_seed(db: AsyncSession = Depends(get_db)):
    try:
        output = await DemoControlService.run_seed(db)
    except CatalogNotEmptyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Seed command executed successfully.", "output": output}
