from __future__ import annotations
import itertools
import logging
import threading
from typing import Dict, Iterable, List, Optional, Protocol, TypeVar

from pydantic import ValidationError

from docreview.app.core.config import settings
from docreview.app.core.errors import PARAMS_ERROR_CODE
from docreview.app.core.rbac import Role
from docreview.app.schemas.common import ApiResult, Page, PageParams
from docreview.app.schemas.review import DocLog, DocReview, PendingDoc, ReviewState
from docreview.app.schemas.user import User

log = logging.getLogger(__name__)

T = TypeVar("T")

class DocReviewService(Protocol):
    """Business side of document review. Every call answers with a complete envelope."""

    def query_reviews_by_page(self, page: PageParams) -> ApiResult: ...
    def user_read(self, ids: List[str], user_id: str) -> ApiResult: ...
    def refuse(self, doc_id: str, reason: str) -> ApiResult: ...
    def refuse_batch(self, ids: List[str], reason: str) -> ApiResult: ...
    def approve_batch(self, ids: List[str]) -> ApiResult: ...
    def query_review_log(self, page: PageParams, user: User, role: Optional[Role]) -> ApiResult: ...
    def delete_reviews_batch(self, ids: List[str]) -> ApiResult: ...
    def query_doc_logs(self, page: PageParams) -> ApiResult: ...
    def delete_doc_log_batch(self, ids: List[str]) -> ApiResult: ...

def paginate(items: List[T], page: PageParams) -> Page[T]:
    window = items[page.offset:page.offset + page.rows]
    return Page(page=page.page, rows=page.rows, total=len(items), items=window)

def seed_pending_docs(records: Iterable[dict]) -> List[PendingDoc]:
    docs = []
    for i, record in enumerate(records):
        try:
            docs.append(PendingDoc.model_validate(record))
        except ValidationError as exc:
            log.warning("skipping seed document %d: %s", i, exc.errors()[0].get("msg"))
    return docs

class InMemoryDocReviewService:
    """Keeps pending documents, review outcomes and the audit log in process memory."""

    def __init__(self, pending: Optional[Iterable[PendingDoc]] = None):
        self._lock = threading.Lock()
        if pending is None:
            pending = seed_pending_docs(settings.seed_pending_docs())
        self._pending: Dict[str, PendingDoc] = {d.id: d for d in pending}
        self._reviews: Dict[str, DocReview] = {}
        self._logs: Dict[str, DocLog] = {}
        self._seq = itertools.count(1)

    # ---- internals (caller holds the lock) ----

    def _conclude(self, doc: PendingDoc, state: ReviewState, reason: Optional[str] = None) -> DocReview:
        del self._pending[doc.id]
        review = DocReview(
            id=f"rev-{next(self._seq)}",
            doc_id=doc.id,
            doc_name=doc.name,
            user_id=doc.uploader_id,
            state=state,
            reason=reason,
        )
        self._reviews[review.id] = review
        entry = DocLog(
            id=f"log-{next(self._seq)}",
            doc_id=doc.id,
            doc_name=doc.name,
            action=state.value,
            detail=reason,
        )
        self._logs[entry.id] = entry
        return review

    def _conclude_batch(self, ids: List[str], state: ReviewState, reason: Optional[str] = None) -> List[str]:
        done = []
        with self._lock:
            for doc_id in ids:
                doc = self._pending.get(doc_id)
                if doc is None:
                    continue
                self._conclude(doc, state, reason)
                done.append(doc_id)
        return done

    # ---- public API ----

    def submit(self, doc: PendingDoc) -> None:
        with self._lock:
            self._pending[doc.id] = doc

    def query_reviews_by_page(self, page: PageParams) -> ApiResult:
        with self._lock:
            docs = list(self._pending.values())
        if page.filter_word:
            word = page.filter_word.lower()
            docs = [d for d in docs if word in d.name.lower()]
        return ApiResult.success(paginate(docs, page))

    def user_read(self, ids: List[str], user_id: str) -> ApiResult:
        marked = 0
        with self._lock:
            for rid in ids:
                review = self._reviews.get(rid)
                # only the uploader may acknowledge an outcome
                if review is None or review.user_id != user_id:
                    continue
                if not review.read:
                    self._reviews[rid] = review.model_copy(update={"read": True})
                    marked += 1
        return ApiResult.success({"updated": marked})

    def refuse(self, doc_id: str, reason: str) -> ApiResult:
        with self._lock:
            doc = self._pending.get(doc_id)
            if doc is None:
                return ApiResult.error(PARAMS_ERROR_CODE, f"document {doc_id} is not awaiting review")
            review = self._conclude(doc, ReviewState.refused, reason)
        log.info("document refused", extra={"op": "refuse", "count": 1})
        return ApiResult.success(review)

    def refuse_batch(self, ids: List[str], reason: str) -> ApiResult:
        done = self._conclude_batch(ids, ReviewState.refused, reason)
        log.info("documents refused", extra={"op": "refuseBatch", "count": len(done)})
        return ApiResult.success({"refused": done})

    def approve_batch(self, ids: List[str]) -> ApiResult:
        done = self._conclude_batch(ids, ReviewState.approved)
        log.info("documents approved", extra={"op": "approve", "count": len(done)})
        return ApiResult.success({"approved": done})

    def query_review_log(self, page: PageParams, user: User, role: Optional[Role]) -> ApiResult:
        with self._lock:
            reviews = list(reversed(self._reviews.values()))
        if role != Role.admin:
            reviews = [r for r in reviews if r.user_id == user.id]
        return ApiResult.success(paginate(reviews, page))

    def delete_reviews_batch(self, ids: List[str]) -> ApiResult:
        with self._lock:
            deleted = [rid for rid in ids if self._reviews.pop(rid, None) is not None]
        return ApiResult.success({"deleted": deleted})

    def query_doc_logs(self, page: PageParams) -> ApiResult:
        with self._lock:
            logs = list(reversed(self._logs.values()))
        if page.filter_word:
            word = page.filter_word.lower()
            logs = [e for e in logs if word in e.doc_name.lower()]
        return ApiResult.success(paginate(logs, page))

    def delete_doc_log_batch(self, ids: List[str]) -> ApiResult:
        with self._lock:
            deleted = [lid for lid in ids if self._logs.pop(lid, None) is not None]
        return ApiResult.success({"deleted": deleted})
