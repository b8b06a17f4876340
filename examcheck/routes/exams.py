"""
API routes for browsing the exam corpus
"""
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query

from ..exceptions import ExamNotFoundError, MalformedExamError
from ..models.exam import ExamInfo
from ..services.corpus_service import corpus_service
from ..services.division_resolver import describe_exam

router = APIRouter(prefix="/exams", tags=["exams"])


@router.get("/", response_model=List[ExamInfo])
async def get_exams(
    exam_level: Optional[str] = Query(None, description="Filter by exam level"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of exams to return"),
    offset: int = Query(0, ge=0, description="Number of exams to skip")
):
    """
    Get all exams with optional filtering
    """
    try:
        exams = corpus_service.list_exams()

        if exam_level:
            exams = [exam for exam in exams if exam.exam_level.lower() == exam_level.lower()]

        # Apply pagination
        return exams[offset:offset + limit]

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to retrieve exams: {str(e)}")


@router.get("/{exam_code}", response_model=ExamInfo)
async def get_exam(exam_code: str):
    """
    Get a specific exam by code
    """
    try:
        return describe_exam(corpus_service.get_exam(exam_code))

    except ExamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MalformedExamError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to retrieve exam: {str(e)}")
