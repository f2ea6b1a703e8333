import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from foodblog.models.blog import Blog
from foodblog.models.user import User
from foodblog.repositories.blog_repository import BlogRepository
from foodblog.repositories.comment_repository import CommentRepository
from foodblog.repositories.like_repository import LikeRepository
from foodblog.repositories.user_repository import UserRepository
from foodblog.schemas.blog_schema import BlogData
from foodblog.services.authorization import Caller, ensure_owner_or_admin
from foodblog.services.comment_service import CommentEntry, with_authors
from foodblog.services.image_host import ImageHostClient, UploadedImage
from foodblog.utils.exceptions import BadRequestError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_MY = "my"
FILTER_FEATURED = "featured"


@dataclass
class BlogView:
    """
    응답용 리뷰 묶음: 엔티티 + 요청 시점에 계산한 파생 값
    """
    blog: Blog
    author: Optional[User] = None
    comments: List[CommentEntry] = field(default_factory=list)
    total_likes: int = 0
    has_liked: bool = False
    is_bookmarked: bool = False


def normalize_tags(tags: Any) -> List[str]:
    """
    태그 입력(배열 또는 콤마 구분 문자열)을 공백 제거된 목록으로 변환
    """
    if isinstance(tags, list):
        return [t for t in (str(tag).strip() for tag in tags) if t]
    if isinstance(tags, str):
        return [t for t in (tag.strip() for tag in tags.split(",")) if t]
    raise BadRequestError("Tags must be a string or array")


def _parse_rating(rating: Any) -> float:
    try:
        return float(rating)
    except (TypeError, ValueError):
        raise BadRequestError("Rating must be a number")


class BlogService:
    """
    리뷰 CRUD 및 북마크 서비스
    - 수정/삭제는 작성자 또는 관리자만 가능
    - 리뷰 삭제 시 좋아요는 먼저 모두 삭제, 댓글과 북마크 참조는 남음
    """
    def __init__(self, db: AsyncSession, image_host: Optional[ImageHostClient] = None):
        self.db = db
        self.image_host = image_host
        self.blog_repo = BlogRepository(db)
        self.comment_repo = CommentRepository(db)
        self.like_repo = LikeRepository(db)
        self.user_repo = UserRepository(db)

    async def _bookmarks_of(self, caller: Optional[Caller]) -> List[int]:
        if caller is None:
            return []
        user = await self.user_repo.find_by_id(caller.id)
        return list(user.bookmarks or []) if user else []

    async def _to_view(
        self,
        blog: Blog,
        caller: Optional[Caller],
        bookmarks: Sequence[int],
    ) -> BlogView:
        """
        좋아요 수/좋아요 여부/북마크 여부를 매번 새로 계산하여 BlogView 생성
        """
        comments = await self.comment_repo.find_by_ids(blog.comment_ids or [])
        return BlogView(
            blog=blog,
            author=await self.user_repo.find_by_id(blog.author_id),
            comments=await with_authors(self.user_repo, comments),
            total_likes=await self.like_repo.count_by_blog(blog.id),
            has_liked=(
                await self.like_repo.exists(blog.id, caller.id) if caller else False
            ),
            is_bookmarked=blog.id in bookmarks,
        )

    async def _get_or_404(self, blog_id: int) -> Blog:
        blog = await self.blog_repo.find_by_id(blog_id)
        if not blog:
            raise NotFoundError("Blog not found")
        return blog

    async def _upload(self, images: Sequence[UploadedImage]) -> List[str]:
        if not images:
            return []
        if self.image_host is None:
            raise BadRequestError("Image upload is not available")
        return await self.image_host.upload_many(images)

    async def list_blogs(self, filter: str, caller: Optional[Caller]) -> List[BlogView]:
        """
        리뷰 목록 조회 (최신순)
        - all: 전체 / my: 내 리뷰 (로그인 필요) / featured: 추천 리뷰
        """
        if filter == FILTER_MY:
            if caller is None:
                raise UnauthorizedError("Unauthorized: User not authenticated")
            blogs = await self.blog_repo.list_blogs(author_id=caller.id)
        elif filter == FILTER_FEATURED:
            blogs = await self.blog_repo.list_blogs(featured_only=True)
        else:
            blogs = await self.blog_repo.list_blogs()

        bookmarks = await self._bookmarks_of(caller)
        return [await self._to_view(blog, caller, bookmarks) for blog in blogs]

    async def get_blog(self, blog_id: int, caller: Optional[Caller]) -> BlogView:
        blog = await self._get_or_404(blog_id)
        return await self._to_view(blog, caller, await self._bookmarks_of(caller))

    async def create_blog(
        self,
        caller: Caller,
        data: BlogData,
        images: Sequence[UploadedImage] = (),
    ) -> BlogView:
        """
        리뷰 생성
        1) 필수 필드(title, content, restaurant, rating) 확인
        2) 이미지 업로드 → URL 목록 확보
        3) Blog 저장 (작성자 = 호출자)
        """
        if not data.title or not data.content or not data.restaurant or data.rating in (None, "", 0):
            raise BadRequestError("Required fields: title, content, restaurant, rating")

        rating = _parse_rating(data.rating)
        tags = normalize_tags(data.tags) if data.tags is not None else []
        image_urls = await self._upload(images)

        blog = Blog(
            title=data.title,
            content=data.content,
            restaurant=data.restaurant,
            location=data.location or "",
            rating=rating,
            tags=tags,
            category=data.category or "",
            images=image_urls,
            author_id=caller.id,
            is_featured=False,
            comment_ids=[],
        )
        self.blog_repo.add(blog)
        await self.db.commit()
        await self.db.refresh(blog)
        logger.info("리뷰 생성: id=%s author=%s", blog.id, caller.id)
        return BlogView(blog=blog, author=await self.user_repo.find_by_id(caller.id))

    async def update_blog(
        self,
        blog_id: int,
        caller: Caller,
        data: BlogData,
        images: Sequence[UploadedImage] = (),
    ) -> BlogView:
        """
        리뷰 수정 (작성자 또는 관리자)
        - 전달된 필드만 변경, 작성자는 변경 불가
        - data.images가 있으면 유지할 기존 이미지 목록으로 사용, 새 업로드는 뒤에 추가
        """
        blog = await self._get_or_404(blog_id)
        ensure_owner_or_admin(blog, caller)

        # 빈 배열은 태그 전체 삭제, 빈 문자열은 변경 없음
        if data.tags is not None and data.tags != "":
            tags = normalize_tags(data.tags)
        else:
            tags = list(blog.tags or [])
        rating = _parse_rating(data.rating) if data.rating is not None else blog.rating

        image_urls = list(data.images) if data.images is not None else list(blog.images or [])
        image_urls.extend(await self._upload(images))

        blog.title = data.title or blog.title
        blog.content = data.content or blog.content
        blog.restaurant = data.restaurant or blog.restaurant
        if data.location is not None:
            blog.location = data.location
        if data.category is not None:
            blog.category = data.category
        if data.is_featured is not None:
            blog.is_featured = data.is_featured
        blog.rating = rating
        blog.tags = tags
        blog.images = image_urls

        await self.db.commit()
        await self.db.refresh(blog)
        return await self._to_view(blog, caller, await self._bookmarks_of(caller))

    async def delete_blog(self, blog_id: int, caller: Caller) -> None:
        """
        리뷰 삭제 (작성자 또는 관리자)
        1) 리뷰의 좋아요 전체 삭제
        2) 리뷰 삭제
        - 댓글 레코드와 사용자 북마크 참조는 정리하지 않음
        """
        blog = await self._get_or_404(blog_id)
        ensure_owner_or_admin(blog, caller)

        removed = await self.like_repo.delete_by_blog(blog.id)
        await self.db.commit()
        await self.blog_repo.delete(blog)
        await self.db.commit()
        logger.info("리뷰 삭제: id=%s (좋아요 %d건 삭제)", blog_id, removed)

    async def toggle_bookmark(self, blog_id: int, caller: Caller) -> bool:
        """
        북마크 토글 후 새 상태 반환 (배열 멤버십 기준, 목록 전체를 저장)
        """
        user = await self.user_repo.find_by_id(caller.id)
        if not user:
            raise NotFoundError("User not found")
        await self._get_or_404(blog_id)

        bookmarks = list(user.bookmarks or [])
        if blog_id in bookmarks:
            user.bookmarks = [b for b in bookmarks if b != blog_id]
            is_bookmarked = False
        else:
            user.bookmarks = bookmarks + [blog_id]
            is_bookmarked = True

        await self.db.commit()
        return is_bookmarked

    async def list_bookmarked_blogs(self, caller: Caller) -> List[BlogView]:
        """
        북마크한 리뷰 목록 (삭제된 리뷰 ID는 건너뜀)
        """
        user = await self.user_repo.find_by_id(caller.id)
        if not user:
            raise NotFoundError("User not found")
        bookmarks = list(user.bookmarks or [])
        blogs = await self.blog_repo.find_by_ids(bookmarks)
        return [await self._to_view(blog, caller, bookmarks) for blog in blogs]
