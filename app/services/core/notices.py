# app/services/core/notices.py

from dataclasses import dataclass

from app.services.utils.enums import NoticeVariant


@dataclass(frozen=True)
class Notice:
    """Короткое уведомление для пользователя (toast в интерфейсе)."""
    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.NORMAL


ROSTER_LOAD_FAILED = Notice("錯誤", "無法載入學生或教練資料。請稍後再試。", NoticeVariant.DESTRUCTIVE)
RECORD_ADDED = Notice("成功", "課程記錄已新增。")
VALIDATION_FAILED = Notice("錯誤", "請填寫所有必要資訊。", NoticeVariant.DESTRUCTIVE)
RECORD_DELETED = Notice("成功", "課程記錄已刪除。")
NOTHING_TO_EXPORT = Notice("錯誤", "沒有符合條件的記錄", NoticeVariant.DESTRUCTIVE)
