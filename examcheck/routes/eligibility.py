"""
API routes for eligibility checking
"""
import logging
from fastapi import APIRouter, HTTPException

from ..exceptions import ExamNotFoundError, MalformedExamError
from ..models.user import ExamCheckRequest, EligibilityScanRequest, UserProfile
from ..models.verdict import ExamVerdict, ScanResponse
from ..services.batch_service import batch_service
from ..services.corpus_service import corpus_service
from ..services.eligibility_service import eligibility_service
from ..utils.validators import validate_user_profile_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


def _validate_profile(profile: UserProfile):
    validation_errors = validate_user_profile_data(profile.model_dump())
    if validation_errors:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid user profile data: {'; '.join(validation_errors)}"
        )


@router.post("/exam", response_model=ExamVerdict)
async def check_exam(request: ExamCheckRequest):
    """
    Check a candidate against every division and session of one exam
    """
    try:
        _validate_profile(request.profile)

        if request.exam is not None:
            exam = request.exam
        elif request.exam_code:
            exam = corpus_service.get_exam(request.exam_code)
        else:
            raise HTTPException(status_code=400, detail="Either 'exam' or 'exam_code' is required")

        return eligibility_service.evaluate_exam(request.profile, exam, session=request.session)

    except HTTPException:
        raise
    except ExamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MalformedExamError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error checking exam eligibility: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )


@router.post("/scan", response_model=ScanResponse)
async def scan_eligibility(request: EligibilityScanRequest):
    """
    Check a candidate against every exam of a corpus

    Exams that cannot be evaluated are reported under result.skipped.
    """
    try:
        _validate_profile(request.profile)

        corpus = request.exams if request.exams is not None else corpus_service.corpus()
        result = batch_service.evaluate_all(request.profile, corpus)

        if request.exam_level or request.conducting_body or request.exam_name:
            filters = {
                "exam_level": request.exam_level,
                "conducting_body": request.conducting_body,
                "exam_name": request.exam_name,
            }
            result.eligible = batch_service.filter_results(result.eligible, **filters)
            result.ineligible = batch_service.filter_results(result.ineligible, **filters)
            result.eligible_count = len(result.eligible)
            result.ineligible_count = len(result.ineligible)

        return ScanResponse(result=result, summary=batch_service.summarize_eligible(result.eligible))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error scanning eligibility: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )
