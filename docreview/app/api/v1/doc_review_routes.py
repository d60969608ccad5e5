import logging
from fastapi import APIRouter, Depends, Request
from docreview.app.api.v1.deps import get_review_service, json_body, page_params, resolve_actor
from docreview.app.core.rbac import Principal, RequireAdmin, RequireAnyone, RequireUser, RequireUserOrAdmin
from docreview.app.schemas.common import ApiResult, PageParams
from docreview.app.schemas.review import BatchIdDTO, RefuseBatchDTO, RefuseDTO
from docreview.app.schemas.user import User
from docreview.app.services.review_service import DocReviewService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/docReview", tags=["docReview"])

def _trace(op: str, principal: Principal, count=None):
    log.info(op, extra={
        "op": op,
        "user_id": principal.user_id,
        "role": principal.role.value if principal.role else None,
        "count": count,
    })

@router.get("/queryDocForReview", response_model=ApiResult)
def query_doc_for_review(
    principal: Principal = RequireAdmin,
    page: PageParams = Depends(page_params),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("queryDocForReview", principal)
    return svc.query_reviews_by_page(page)

@router.put("/userRead", response_model=ApiResult)
def user_read(
    principal: Principal = RequireUser,
    actor: User = Depends(resolve_actor),
    dto: BatchIdDTO = Depends(json_body(BatchIdDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    # the service limits this to reviews of documents the actor uploaded
    _trace("userRead", principal, len(dto.ids))
    return svc.user_read(dto.ids, actor.id)

@router.post("/refuse", response_model=ApiResult)
def refuse(
    principal: Principal = RequireAdmin,
    dto: RefuseDTO = Depends(json_body(RefuseDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("refuse", principal, 1)
    return svc.refuse(dto.doc_id, dto.reason)

@router.post("/refuseBatch", response_model=ApiResult)
def refuse_batch(
    principal: Principal = RequireAdmin,
    dto: RefuseBatchDTO = Depends(json_body(RefuseBatchDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("refuseBatch", principal, len(dto.ids))
    return svc.refuse_batch(dto.ids, dto.reason)

@router.post("/approve", response_model=ApiResult)
def approve(
    principal: Principal = RequireAdmin,
    dto: BatchIdDTO = Depends(json_body(BatchIdDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("approve", principal, len(dto.ids))
    return svc.approve_batch(dto.ids)

@router.get("/queryReviewResultList", response_model=ApiResult)
def query_review_result_list(
    principal: Principal = RequireUserOrAdmin,
    actor: User = Depends(resolve_actor),
    page: PageParams = Depends(page_params),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("queryReviewResultList", principal)
    return svc.query_review_log(page, actor, principal.role)

# No role requirement: any known user may delete review results (removeLog below is admin-only).
@router.delete("/removeDocReview", response_model=ApiResult)
def remove_doc_review(
    principal: Principal = RequireAnyone,
    actor: User = Depends(resolve_actor),
    dto: BatchIdDTO = Depends(json_body(BatchIdDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("removeDocReview", principal, len(dto.ids))
    return svc.delete_reviews_batch(dto.ids)

@router.get("/queryLogList", response_model=ApiResult)
def query_log_list(
    principal: Principal = RequireAdmin,
    page: PageParams = Depends(page_params),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("queryLogList", principal)
    return svc.query_doc_logs(page)

@router.delete("/removeLog", response_model=ApiResult)
def remove_log(
    principal: Principal = RequireAdmin,
    dto: BatchIdDTO = Depends(json_body(BatchIdDTO)),
    svc: DocReviewService = Depends(get_review_service),
):
    _trace("removeLog", principal, len(dto.ids))
    return svc.delete_doc_log_batch(dto.ids)

@router.put("/systemConfig", response_model=ApiResult)
async def system_config(request: Request, principal: Principal = RequireAdmin):
    # accepted and discarded; nothing is applied yet
    raw = await request.body()
    log.info("systemConfig", extra={"op": "systemConfig", "user_id": principal.user_id, "count": len(raw)})
    return ApiResult.success()
