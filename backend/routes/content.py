"""Static page content routes."""

from fastapi import APIRouter, Depends, Request

from services.content import AboutContent, ContentService, FAQContent

router = APIRouter(prefix="/api", tags=["content"])


def get_content(request: Request) -> ContentService:
    return request.app.state.content


@router.get("/about", response_model=AboutContent)
async def about(content: ContentService = Depends(get_content)) -> AboutContent:
    return content.about()


@router.get("/faq", response_model=FAQContent)
async def faq(content: ContentService = Depends(get_content)) -> FAQContent:
    return content.faq()
