"""
User-facing messages.

The rendering client shows these verbatim; durations are in milliseconds.
"""

from typing import Dict, Final

translations: Final[Dict[str, Dict[str, str]]] = {
    'ar': {
        'title': 'كلمه',
        'winMessage': 'أحسنت! لقد فزت!',
        'loseMessage': 'حظاً أوفر في المرة القادمة!',
        'solutionMessage': 'الكلمة كانت: ',
        'invalidGuessLength': 'يجب أن تكون الكلمة 5 أحرف',
        'invalidGuessNotInList': 'الكلمة غير موجودة في القائمة',
        'checkingWord': 'جارٍ التحقق من الكلمة...',
        'newWordAccepted': 'تم قبول الكلمة الجديدة!',
        'validationFailed': 'تعذر التحقق من الكلمة، ربما ليست صحيحة',
        'randomMode': 'كلمة عشوائية',
        'dailyMode': 'الوضع اليومي',
        'shareTitle': 'كلمه - نتيجتي اليوم',
    },
}

DEFAULT_FEEDBACK_DURATION_MS: Final[int] = 2000
CHECKING_FEEDBACK_DURATION_MS: Final[int] = 1000
