"""Static default field configuration for the Get Featured application.

The layout mirrors the sections of the public form: the shared profile block,
the closing integration/promotion block, and one block per feature variant.
A remote override (see :mod:`core.form_config`) can replace individual fields.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from models.fields import FieldConfig, FieldKind, FieldsLayout

_MEDIA_ACCEPT = "image/*,video/*"


def _options(*pairs: tuple[str, str]) -> tuple[dict[str, str], ...]:
    return tuple({"id": option_id, "label": label} for option_id, label in pairs)


def _field(
    kind: FieldKind,
    label: str,
    *,
    required: bool = False,
    options: Iterable[Mapping[str, str]] = (),
    validation: Mapping[str, Any] | None = None,
    **extra: Any,
) -> FieldConfig:
    payload: dict[str, Any] = {
        "kind": kind,
        "label": label,
        "required": required,
        "options": tuple(options),
        "validation": dict(validation or {}),
    }
    payload.update(extra)
    return FieldConfig.model_validate(payload)


def _text(label: str, min_chars: int, message: str, *, required: bool = True, max_length: int | None = None) -> FieldConfig:
    validation: dict[str, Any] = {"minChars": min_chars, "message": message}
    if max_length is not None:
        validation["maxLength"] = max_length
    return _field(FieldKind.TEXT, label, required=required, validation=validation)


def _paragraph(
    label: str, min_chars: int, message: str, *, required: bool = True, max_length: int | None = None
) -> FieldConfig:
    validation: dict[str, Any] = {"minChars": min_chars, "message": message}
    if max_length is not None:
        validation["maxLength"] = max_length
    return _field(FieldKind.PARAGRAPH, label, required=required, validation=validation)


def _media(label: str, min_files: int | None, max_files: int, max_size: int, message: str, *, required: bool = True) -> FieldConfig:
    validation: dict[str, Any] = {
        "maxFiles": max_files,
        "maxSize": max_size,
        "accept": _MEDIA_ACCEPT,
        "message": message,
    }
    if min_files is not None:
        validation["minFiles"] = min_files
    return _field(FieldKind.FILE_COLLECTION, label, required=required, validation=validation)


def _bullets(label: str, min_chars: int, message: str) -> FieldConfig:
    return _field(
        FieldKind.ORDERED_LIST,
        label,
        required=True,
        max_points=5,
        validation={"minChars": min_chars, "message": message},
    )


PROFILE_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "email": _field(
            FieldKind.EMAIL,
            "Email",
            required=True,
            validation={
                "pattern": r"^[^\s@]+@[^\s@]+\.[^\s@]+$",
                "minChars": 6,
                "message": "Email must be at least 6 characters (e.g., a@b.co)",
            },
        ),
        "fullName": _text("Full Name", 2, "Full name must be at least 2 characters", max_length=100),
        "phone": _field(
            FieldKind.PHONE,
            "Phone Number",
            required=True,
            validation={"minLength": 10, "minChars": 10, "message": "Phone number must be at least 10 digits"},
        ),
        "businessName": _text("Business Name", 2, "Business name must be at least 2 characters", max_length=100),
        "businessAddress": _text(
            "Business Address",
            10,
            "Please enter a complete address (minimum 10 characters)",
            max_length=200,
        ),
        "primarySpecialties": _field(
            FieldKind.MULTI_CHOICE,
            "Primary Specialties",
            required=True,
            min_selections=1,
            options=_options(
                ("hair_stylist", "Hair Stylist"),
                ("makeup_artist", "Makeup Artist"),
                ("esthetician", "Esthetician"),
                ("nail_tech", "Nail Tech"),
                ("massage_therapist", "Massage Therapist"),
                ("wellness", "Wellness"),
                ("injector", "Injector"),
                ("med_spa", "Med Spa"),
                ("other", "Other"),
            ),
            validation={"message": "Please select at least one specialty"},
        ),
        "otherSpecialty": _text(
            "Other Specialty",
            3,
            "If provided, other specialty must be at least 3 characters",
            required=False,
            max_length=100,
        ),
        "website": _text(
            "Website",
            4,
            "If provided, website must be at least 4 characters (e.g., https://example.com, x.co, www.glamlink.net)",
            required=False,
        ),
        "instagramHandle": _field(
            FieldKind.TEXT,
            "Instagram Handle",
            required=True,
            validation={
                "pattern": r"^@?[a-zA-Z0-9_.]+$",
                "maxLength": 30,
                "minChars": 2,
                "message": "Instagram handle must be at least 2 characters (excluding @)",
            },
        ),
        "bookingPreference": _field(
            FieldKind.SINGLE_CHOICE,
            "Booking Preference",
            options=_options(("glamlink", "Book through Glamlink"), ("external", "Use my own booking link")),
        ),
        "bookingLink": _field(FieldKind.URL, "Booking Link"),
        "applicationType": _field(
            FieldKind.SINGLE_CHOICE,
            "Application Type",
            options=_options(
                ("local-spotlight", "Local Spotlight"),
                ("top-treatment", "Top Treatment"),
                ("cover", "Cover Feature"),
                ("rising-star", "Rising Star"),
            ),
        ),
        "certifications": _field(FieldKind.BOOLEAN, "Do you have any professional certifications?"),
        "certificationDetails": _paragraph(
            "Certification Details",
            10,
            "If provided, certification details must be at least 10 characters",
            required=False,
            max_length=3000,
        ),
    }
)

INTEGRATION_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "excitementFeatures": _field(
            FieldKind.MULTI_CHOICE,
            "What excites you about Glamlink",
            required=True,
            min_selections=1,
            options=_options(
                ("discovery", "Clients ability to discover pros nearby and check out their services, work, reviews, etc"),
                ("booking", "Seamless booking inside Glamlink either in app or goes directly to your booking link"),
                ("ecommerce", "Pro shops & e-commerce"),
                ("magazine", "The Glamlink Edit magazine & spotlights"),
                ("ai", "AI powered discovery & smart recommendations (coming soon)"),
                ("community", "Community & networking with other pros"),
            ),
            validation={"message": "Please select at least one feature that excites you"},
        ),
        "painPoints": _field(
            FieldKind.MULTI_CHOICE,
            "Biggest pain points",
            required=True,
            min_selections=1,
            options=_options(
                ("no-conversions", "Posting but no conversions"),
                ("dms-backforth", "DMs-too much back and forth"),
                ("no-shows", "No shows"),
                ("juggling-platforms", "Juggling too many platforms (booking, social media, e-commerce, etc)"),
                ("inventory-not-tied", "Inventory/aftercare not tied to treatments"),
                ("client-notes-everywhere", "Client notes/consents all over the place"),
                ("finding-clients", "Finding new clients"),
                ("no-pain-points", "None of the above"),
            ),
            validation={"message": "Please select at least one pain point"},
        ),
        "promotionOffer": _field(FieldKind.BOOLEAN, "I would like to offer a promotion with this feature"),
        "promotionDetails": _paragraph(
            "What promotion would you like to run?",
            15,
            "If offering a promotion, please provide at least 15 characters describing it",
            required=False,
            max_length=5000,
        ),
        "instagramConsent": _field(
            FieldKind.BOOLEAN,
            "I consent to have Glamlink create a free professional profile using publically available "
            "instagram content to help build my professional portfolio",
            required=True,
            validation={"message": "Please consent to profile creation using Instagram content"},
        ),
        "contentPlanningRadio": _field(
            FieldKind.SINGLE_CHOICE,
            "Content planning should be scheduled 2 weeks before being featured",
            required=True,
            options=_options(
                ("schedule-day", "Schedule a day for content"),
                ("create-video", "Create a video of your space or of a treatment"),
            ),
            validation={"message": "Please select a content planning option"},
        ),
        "contentPlanningDate": _paragraph(
            "Say what dates work well below",
            8,
            "Please share at least 8 characters about which dates work",
            required=False,
            max_length=3000,
        ),
        "contentPlanningMedia": _media(
            "Upload your images and video below",
            None,
            5,
            50,
            "Maximum 5 files, up to 50MB each",
            required=False,
        ),
        "hearAboutLocalSpotlight": _paragraph(
            "How did you hear about Glamlink?",
            10,
            "Please tell us how you heard about Glamlink (minimum 10 characters)",
            max_length=4000,
        ),
    }
)

COVER_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "bio": _paragraph(
            "Bio (A brief story about your journey, how you got started)",
            50,
            "Bio must be at least 50 characters to provide meaningful information",
            max_length=3000,
        ),
        "headshots": _media(
            "Headshots 2-3", 2, 3, 50, "Please upload at least 2 headshots or videos (max 3, up to 50MB each)"
        ),
        "workPhotos": _media(
            "3 Photos Of Your Work",
            3,
            5,
            100,
            "Please upload at least 3 work photos or videos (max 5, up to 100MB each)",
        ),
        "achievements": _bullets("5 Achievements-Bullet Points", 10, "Each achievement must be at least 10 characters"),
        "favoriteQuote": _paragraph(
            "Your favorite quote", 10, "Favorite quote must be at least 10 characters", max_length=5000
        ),
        "professionalProduct": _paragraph(
            "Your Favorite Professional Product (Ideally something you sell) and why",
            30,
            "Professional product description must be at least 30 characters",
            max_length=5000,
        ),
        "confidenceStory": _paragraph(
            "A heart warming story where you changed someone's confidence with a treatment",
            50,
            "Confidence story must be at least 50 characters",
            max_length=5000,
        ),
        "industryChallenges": _paragraph(
            "Industry Challenges You've Overcome",
            50,
            "Industry challenges description must be at least 50 characters",
            max_length=5000,
        ),
        "innovations": _paragraph(
            "Innovations or New Techniques",
            30,
            "Innovations description must be at least 30 characters",
            max_length=5000,
        ),
        "futureGoals": _paragraph(
            "Future Goals and Aspirations", 30, "Future goals must be at least 30 characters", max_length=4000
        ),
        "industryInspiration": _paragraph(
            "Who Inspires You in the Industry?",
            10,
            "Industry inspiration must be at least 10 characters",
            max_length=5000,
        ),
    }
)

LOCAL_SPOTLIGHT_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "workPhotos": _media(
            "Work Photos", 3, 5, 100, "Please upload at least 3 work photos or videos (max 5, up to 100MB each)"
        ),
        "workExperience": _paragraph(
            "Work Experience", 50, "Work experience must be at least 50 characters", max_length=5000
        ),
        "socialMedia": _field(
            FieldKind.MULTI_CHOICE,
            "Social Media Platforms",
            options=_options(
                ("instagram", "Instagram"),
                ("facebook", "Facebook"),
                ("tiktok", "TikTok"),
                ("youtube", "YouTube"),
                ("twitter", "Twitter/X"),
                ("linkedin", "LinkedIn"),
            ),
        ),
    }
)

RISING_STAR_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "specialties": _field(
            FieldKind.MULTI_CHOICE,
            "Primary Specialties",
            required=True,
            options=_options(
                ("hair_styling", "Hair Styling"),
                ("hair_coloring", "Hair Coloring"),
                ("makeup_artistry", "Makeup Artistry"),
                ("skincare", "Skincare"),
                ("esthetician", "Esthetics"),
                ("nail_tech", "Nail Technology"),
                ("eyelash_specialist", "Eyelash Specialist"),
                ("beauty_education", "Beauty Education"),
            ),
            validation={"message": "Please select at least one specialty"},
        ),
        "careerStartTime": _text(
            "When did you start your career in the beauty industry?",
            4,
            "Career start time must be at least 4 characters (e.g., 2020 or 3 yrs)",
            max_length=500,
        ),
        "backgroundStory": _paragraph(
            "Your Background Story", 80, "Background story must be at least 80 characters", max_length=8000
        ),
        "careerHighlights": _bullets("Career Highlights", 10, "Each career highlight must be at least 10 characters"),
        "uniqueApproach": _paragraph(
            "What makes your approach unique?",
            50,
            "Unique approach description must be at least 50 characters",
            max_length=5000,
        ),
        "portfolioPhotos": _media(
            "Portfolio Photos",
            5,
            8,
            100,
            "Please upload at least 5 portfolio photos or videos (max 8, up to 100MB each)",
        ),
        "professionalPhotos": _media(
            "Professional Headshots",
            2,
            3,
            50,
            "Please upload at least 2 professional photos or videos (max 3, up to 50MB each)",
        ),
        "clientTestimonials": _paragraph(
            "Client Testimonials", 40, "Client testimonials must be at least 40 characters", max_length=6000
        ),
        "innovations": _paragraph(
            "Innovations or New Techniques",
            30,
            "Innovations description must be at least 30 characters",
            max_length=5000,
        ),
        "futureGoals": _paragraph(
            "Future Goals and Aspirations", 30, "Future goals must be at least 30 characters", max_length=4000
        ),
        "mentorshipOffer": _field(FieldKind.BOOLEAN, "Do you currently offer training?"),
        "mentorshipDetails": _paragraph(
            "Training Details",
            30,
            "If provided, mentorship details must be at least 30 characters",
            required=False,
            max_length=5000,
        ),
        "advice": _paragraph("Advice for Others", 50, "Advice must be at least 50 characters", max_length=4000),
    }
)

TOP_TREATMENT_FIELDS: Mapping[str, FieldConfig] = MappingProxyType(
    {
        "treatmentName": _text("Treatment Name", 3, "Treatment name must be at least 3 characters", max_length=100),
        "treatmentDescription": _paragraph(
            "Treatment Description",
            50,
            "Treatment description must be at least 50 characters",
            max_length=6000,
        ),
        "treatmentBenefits": _bullets("Client Benefits", 15, "Each benefit must be at least 15 characters"),
        "treatmentDuration": _text(
            "Treatment Duration", 3, "Treatment duration must be at least 3 characters", max_length=50
        ),
        "treatmentFrequency": _text(
            "How often should this treatment be done?",
            5,
            "Treatment frequency must be at least 5 characters",
            max_length=500,
        ),
        "treatmentPrice": _text("Price Range", 2, "Treatment price must be at least 2 characters", max_length=50),
        "treatmentExperience": _paragraph(
            "Your Experience with This Treatment",
            20,
            "Treatment experience must be at least 20 characters",
            max_length=5000,
        ),
        "beforeAfterPhotos": _media(
            "Before & After Photos",
            3,
            5,
            100,
            "Please upload at least 3 before/after photos or videos (max 5, up to 100MB each)",
        ),
        "clientResults": _paragraph(
            "Typical Client Results", 30, "Client results must be at least 30 characters", max_length=4000
        ),
        "idealCandidates": _paragraph(
            "Ideal Candidates for This Treatment",
            30,
            "Ideal candidates must be at least 30 characters",
            max_length=4000,
        ),
        "aftercareInstructions": _paragraph(
            "Aftercare Instructions",
            40,
            "Aftercare instructions must be at least 40 characters",
            max_length=4000,
        ),
    }
)


def default_fields_layout() -> FieldsLayout:
    """Return a fresh :class:`FieldsLayout` holding the default configuration."""

    return FieldsLayout(
        profile=dict(PROFILE_FIELDS),
        integration=dict(INTEGRATION_FIELDS),
        cover=dict(COVER_FIELDS),
        local_spotlight=dict(LOCAL_SPOTLIGHT_FIELDS),
        rising_star=dict(RISING_STAR_FIELDS),
        top_treatment=dict(TOP_TREATMENT_FIELDS),
    )


__all__ = [
    "COVER_FIELDS",
    "INTEGRATION_FIELDS",
    "LOCAL_SPOTLIGHT_FIELDS",
    "PROFILE_FIELDS",
    "RISING_STAR_FIELDS",
    "TOP_TREATMENT_FIELDS",
    "default_fields_layout",
]
