from typing import Dict

RTL_LANGUAGES = ("ar",)

STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "app_title": "MedLens",
        "dashboard": "Dashboard",
        "upload": "New Analysis",
        "trends": "Trends",
        "report": "Report",
        "upload_report": "Upload Report",
        "no_reports": "No reports yet. Upload your first medical document to get started.",
        "view_details": "View details",
        "delete": "Delete",
        "pending": "Pending",
        "analyzed": "Analyzed",
        "failed": "Failed",
        "patient_view": "Patient",
        "doctor_view": "Doctor",
        "specialty": "Specialty",
        "general": "General",
        "cardiology": "Cardiology",
        "laboratory": "Laboratory",
        "radiology": "Radiology",
        "internal_medicine": "Internal Medicine",
        "summary": "Summary",
        "clinical_analysis": "Clinical Analysis",
        "executive_summary": "Executive Summary",
        "markers": "Vital Markers",
        "range": "Range",
        "urgency": "Urgency",
        "low": "Low",
        "medium": "Medium",
        "high": "High",
        "emergency": "Emergency",
        "normal": "Normal",
        "critical": "Critical",
        "lifestyle_tips": "Lifestyle Tips",
        "treatment_plan": "Treatment Plan",
        "differential_diagnosis": "Differential Diagnosis",
        "complementary_tests": "Complementary Tests",
        "local_tips": "Local Tips",
        "qrs_complex": "QRS Complex",
        "ejection_fraction": "Ejection Fraction",
        "malignancy_risk": "Malignancy Risk",
        "drug_interactions": "Drug Interactions",
        "emergency_notice": "These findings may need urgent care. Contact a doctor or emergency services now.",
        "hover_hint": "Hover over highlighted terms in the report to see detailed clinical explanations.",
        "export_pdf": "Export PDF",
        "trend_graph": "How your markers changed across reports.",
        "no_trends": "Trends appear once your reports contain numeric markers.",
        "history": "Historical Tracking",
        "choose_file": "Choose an image (JPG, PNG, WEBP) or PDF report",
        "use_camera": "Use camera",
        "take_photo": "Photograph the document",
        "location": "Your location (for local medicine names)",
        "analyze": "Analyze",
        "analyzing": "Analyzing…",
        "scanning_doc": "Scanning document…",
        "biometric_ext": "Extracting biomarkers…",
        "clinical_val": "Clinical validation…",
        "analysis_failed": "Analysis failed. Please ensure the document is clear and readable.",
        "invalid_file": "Please upload a valid image (JPG, PNG) or PDF report.",
        "report_missing": "This report could not be found.",
        "dark_mode": "Dark mode",
        "language": "Language",
        "disclaimer_title": "Medical disclaimer",
        "disclaimer_text": "This tool uses AI to explain medical documents for education only. It is not a diagnosis and does not replace a consultation with a qualified doctor. In an emergency, contact local emergency services.",
        "accept_disclaimer": "I understand and accept",
        "not_available": "N/A",
        "disclaimer_pdf": "Screening & education only; not medical advice.",
        "vital_name": "Marker",
        "value": "Value",
        "status": "Status",
    },
    "ar": {
        "app_title": "ميدلنز",
        "dashboard": "لوحة التحكم",
        "upload": "تحليل جديد",
        "trends": "المؤشرات",
        "report": "التقرير",
        "upload_report": "رفع تقرير",
        "no_reports": "لا توجد تقارير بعد. ارفع أول وثيقة طبية للبدء.",
        "view_details": "عرض التفاصيل",
        "delete": "حذف",
        "pending": "قيد الانتظار",
        "analyzed": "تم التحليل",
        "failed": "فشل",
        "patient_view": "المريض",
        "doctor_view": "الطبيب",
        "specialty": "التخصص",
        "general": "عام",
        "cardiology": "أمراض القلب",
        "laboratory": "المختبر",
        "radiology": "الأشعة",
        "internal_medicine": "الطب الباطني",
        "summary": "الملخص",
        "clinical_analysis": "التحليل السريري",
        "executive_summary": "الملخص التنفيذي",
        "markers": "المؤشرات الحيوية",
        "range": "المدى",
        "urgency": "الأولوية",
        "low": "منخفضة",
        "medium": "متوسطة",
        "high": "عالية",
        "emergency": "طارئة",
        "normal": "طبيعي",
        "critical": "حرج",
        "lifestyle_tips": "نصائح نمط الحياة",
        "treatment_plan": "الخطة العلاجية",
        "differential_diagnosis": "التشخيص التفريقي",
        "complementary_tests": "فحوصات تكميلية",
        "local_tips": "نصائح محلية",
        "emergency_notice": "قد تتطلب هذه النتائج رعاية عاجلة. اتصل بطبيب أو بخدمات الطوارئ الآن.",
        "hover_hint": "مرّر المؤشر فوق العبارات الملوّنة لرؤية الشرح السريري.",
        "export_pdf": "تصدير PDF",
        "trend_graph": "تغيّر مؤشراتك عبر التقارير.",
        "no_trends": "تظهر المؤشرات عندما تحتوي تقاريرك على قيم رقمية.",
        "history": "التتبع التاريخي",
        "choose_file": "اختر صورة (JPG, PNG, WEBP) أو تقرير PDF",
        "use_camera": "استخدام الكاميرا",
        "take_photo": "صوّر الوثيقة",
        "location": "موقعك (لأسماء الأدوية المحلية)",
        "analyze": "تحليل",
        "analyzing": "جارٍ التحليل…",
        "scanning_doc": "مسح الوثيقة…",
        "biometric_ext": "استخراج المؤشرات الحيوية…",
        "clinical_val": "التحقق السريري…",
        "analysis_failed": "فشل التحليل. تأكد من أن الوثيقة واضحة ومقروءة.",
        "invalid_file": "يرجى رفع صورة صالحة (JPG, PNG) أو تقرير PDF.",
        "report_missing": "تعذر العثور على هذا التقرير.",
        "dark_mode": "الوضع الداكن",
        "language": "اللغة",
        "disclaimer_title": "إخلاء مسؤولية طبية",
        "disclaimer_text": "تستخدم هذه الأداة الذكاء الاصطناعي لشرح الوثائق الطبية لأغراض تثقيفية فقط. لا تُعدّ تشخيصاً ولا تغني عن استشارة طبيب مختص. في حالات الطوارئ اتصل بخدمات الطوارئ المحلية.",
        "accept_disclaimer": "أفهم وأوافق",
        "not_available": "غير متوفر",
        "vital_name": "المؤشر",
        "value": "القيمة",
        "status": "الحالة",
    },
    "fr": {
        "app_title": "MedLens",
        "dashboard": "Tableau de bord",
        "upload": "Nouvelle analyse",
        "trends": "Tendances",
        "report": "Rapport",
        "upload_report": "Importer un rapport",
        "no_reports": "Aucun rapport pour l'instant. Importez votre premier document médical.",
        "view_details": "Voir les détails",
        "delete": "Supprimer",
        "pending": "En attente",
        "analyzed": "Analysé",
        "failed": "Échec",
        "patient_view": "Patient",
        "doctor_view": "Médecin",
        "specialty": "Spécialité",
        "general": "Générale",
        "cardiology": "Cardiologie",
        "laboratory": "Laboratoire",
        "radiology": "Radiologie",
        "internal_medicine": "Médecine interne",
        "summary": "Résumé",
        "clinical_analysis": "Analyse clinique",
        "executive_summary": "Synthèse",
        "markers": "Marqueurs vitaux",
        "range": "Intervalle",
        "urgency": "Urgence",
        "low": "Faible",
        "medium": "Moyenne",
        "high": "Élevée",
        "emergency": "Urgence vitale",
        "normal": "Normal",
        "critical": "Critique",
        "lifestyle_tips": "Conseils d'hygiène de vie",
        "treatment_plan": "Plan de traitement",
        "differential_diagnosis": "Diagnostic différentiel",
        "complementary_tests": "Examens complémentaires",
        "local_tips": "Conseils locaux",
        "emergency_notice": "Ces résultats peuvent nécessiter des soins urgents. Contactez un médecin ou les urgences maintenant.",
        "hover_hint": "Survolez les termes surlignés pour voir les explications cliniques.",
        "export_pdf": "Exporter en PDF",
        "trend_graph": "L'évolution de vos marqueurs d'un rapport à l'autre.",
        "no_trends": "Les tendances apparaissent lorsque vos rapports contiennent des valeurs numériques.",
        "history": "Suivi historique",
        "choose_file": "Choisissez une image (JPG, PNG, WEBP) ou un rapport PDF",
        "use_camera": "Utiliser la caméra",
        "take_photo": "Photographiez le document",
        "location": "Votre localisation (pour les noms de médicaments locaux)",
        "analyze": "Analyser",
        "analyzing": "Analyse en cours…",
        "scanning_doc": "Numérisation du document…",
        "biometric_ext": "Extraction des biomarqueurs…",
        "clinical_val": "Validation clinique…",
        "analysis_failed": "L'analyse a échoué. Vérifiez que le document est net et lisible.",
        "invalid_file": "Veuillez importer une image valide (JPG, PNG) ou un rapport PDF.",
        "report_missing": "Ce rapport est introuvable.",
        "dark_mode": "Mode sombre",
        "language": "Langue",
        "disclaimer_title": "Avertissement médical",
        "disclaimer_text": "Cet outil utilise l'IA pour expliquer des documents médicaux à titre éducatif uniquement. Il ne constitue pas un diagnostic et ne remplace pas la consultation d'un médecin. En cas d'urgence, contactez les services d'urgence locaux.",
        "accept_disclaimer": "Je comprends et j'accepte",
        "not_available": "N/D",
        "vital_name": "Marqueur",
        "value": "Valeur",
        "status": "Statut",
    },
}


def t(key: str, lang: str = "en") -> str:
    """Look up a UI string; falls back to English, then to the key itself."""
    table = STRINGS.get(lang, STRINGS["en"])
    return table.get(key) or STRINGS["en"].get(key, key)


def is_rtl(lang: str) -> bool:
    return lang in RTL_LANGUAGES
