from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import movie_service
from ..database import get_db

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("", response_model=List[str])
def list_genres(db: Session = Depends(get_db)):
    return movie_service.list_genres(db)
