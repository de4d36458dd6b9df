"""Prompt cards the facilitator can deal out during a round."""

CUSTOMER_CARDS = (
    "นักศึกษาที่งบน้อย",
    "คนทำงานรีบตอนเช้า",
    "ผู้ประกอบการรายย่อย",
    "คนรักสุขภาพแต่ไม่มีเวลา",
    "คนเมืองที่ไม่ชอบรอคิว",
    "นักท่องเที่ยวมือใหม่",
)

PAIN_CARDS = (
    "เสียเวลา/ต้องรอนาน",
    "ราคาแพงเกินคุ้ม",
    "หาข้อมูลยาก/ตัดสินใจยาก",
    "คุณภาพไม่สม่ำเสมอ",
    "ขั้นตอนยุ่งยาก",
    "ไม่มั่นใจ/กลัวพลาด",
)

EVENT_CARDS = (
    "คู่แข่งตัดราคา 30%",
    "งบการตลาดหายไปครึ่ง",
    "รีวิว 1 ดาวไวรัลในโซเชียล",
    "เทรนด์ใหม่มาแรงใน TikTok",
    "แพลตฟอร์มเปลี่ยนนโยบายโฆษณา",
)

DECKS = {
    'customer': CUSTOMER_CARDS,
    'pain': PAIN_CARDS,
    'event': EVENT_CARDS,
}
