from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.database import get_db
from portfolio.core.logging_config import logger
from portfolio.modules.auth.dependencies import get_current_user
from portfolio.modules.auth.permissions import Actor, Operation, ensure_can_mutate
from portfolio.repositories.resumes import ResumeRepository
from portfolio.schemas.common import MessageResponse, criteria_dependency, require_changes
from portfolio.schemas.resume import ResumeListResponse, ResumeQuery, ResumeResponse, ResumeUpdate
from portfolio.services.resume_storage import PDF_CONTENT_TYPE, resume_storage

router = APIRouter()

# Mounted at the application root, outside API_PREFIX
storage_router = APIRouter()

FILE_NAME_MAX_LENGTH = 255


@router.get("", response_model=ResumeListResponse)
async def list_resumes(
    criteria: ResumeQuery = Depends(criteria_dependency(ResumeQuery)),
    db: AsyncSession = Depends(get_db)
):
    page = await ResumeRepository(db).list(criteria)
    return page.to_response("resumes", ResumeResponse.model_validate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_resume(
    file: UploadFile = File(...),
    primary_resume: bool = Form(True),
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Upload a PDF resume for the caller.

    A primary upload demotes the caller's previous primary resume in the same
    transaction as the insert.
    """
    content = await file.read()
    stored = await resume_storage.save(content, file.filename, file.content_type)

    try:
        resume = await ResumeRepository(db).create_resume(
            owner_id=current_user.id,
            file_url=stored.file_url,
            file_name=(file.filename or stored.filename)[:FILE_NAME_MAX_LENGTH],
            file_size=stored.size,
            primary_resume=primary_resume,
        )
    except Exception:
        # Keep disk and database consistent when the row could not be written
        await resume_storage.delete(stored.file_url)
        raise

    logger.info(f"Resume uploaded: {resume.resume_id} ({stored.size} bytes) primary={primary_resume}")
    return {
        "message": "Resume uploaded successfully",
        "resume": ResumeResponse.model_validate(resume),
    }


@router.put("/{resume_id}")
async def update_resume(
    resume_id: str,
    payload: ResumeUpdate,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    resumes = ResumeRepository(db)
    resume = await resumes.get_or_404(resume_id)
    ensure_can_mutate(current_user, resume, Operation.UPDATE)

    resume = await resumes.update_resume(resume, require_changes(payload))
    return {
        "message": "Resume updated successfully",
        "resume": ResumeResponse.model_validate(resume),
    }


@router.delete("/{resume_id}", response_model=MessageResponse)
async def delete_resume(
    resume_id: str,
    current_user: Actor = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a resume row and its stored file"""
    resumes = ResumeRepository(db)
    resume = await resumes.get_or_404(resume_id)
    ensure_can_mutate(current_user, resume, Operation.DELETE)

    file_url = resume.file_url
    await resumes.delete(resume)
    await resume_storage.delete(file_url)
    return {"message": "Resume deleted successfully"}


@storage_router.get("/storage/resumes/{filename}", tags=["Resumes"])
async def download_resume(filename: str):
    """Serve a stored resume file"""
    path = resume_storage.resolve(filename)
    return FileResponse(path, media_type=PDF_CONTENT_TYPE, filename=filename)
