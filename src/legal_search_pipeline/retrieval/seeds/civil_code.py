"""
Seed corpus: selected sections of the Thai Civil and Commercial Code.

Enough passages to exercise search and answering end to end in local
development. The production corpus is loaded by a separate ingestion job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from legal_search_pipeline.retrieval.document import Document

if TYPE_CHECKING:
    from legal_search_pipeline.core import EmbeddingProvider

CIVIL_CODE = "ประมวลกฎหมายแพ่งและพาณิชย์"


def get_legal_documents() -> list[Document]:
    """Return the seed passages, without embeddings."""
    return [
        Document(
            id="ccc-420",
            title="ลักษณะละเมิด: ความรับผิดเพื่อละเมิด",
            content=(
                "ผู้ใดจงใจหรือประมาทเลินเล่อ ทำต่อบุคคลอื่นโดยผิดกฎหมายให้เขาเสียหาย"
                "ถึงแก่ชีวิตก็ดี แก่ร่างกายก็ดี อนามัยก็ดี เสรีภาพก็ดี ทรัพย์สินหรือสิทธิ"
                "อย่างหนึ่งอย่างใดก็ดี ท่านว่าผู้นั้นทำละเมิดจำต้องใช้ค่าสินไหมทดแทนเพื่อการนั้น"
            ),
            section=420,
            law_type=CIVIL_CODE,
        ),
        Document(
            id="ccc-448",
            title="ลักษณะละเมิด: อายุความ",
            content=(
                "สิทธิเรียกร้องค่าเสียหายอันเกิดแต่มูลละเมิดนั้น ท่านว่าขาดอายุความ"
                "เมื่อพ้นปีหนึ่งนับแต่วันที่ผู้ต้องเสียหายรู้ถึงการละเมิดและรู้ตัวผู้จะพึง"
                "ต้องใช้ค่าสินไหมทดแทน หรือเมื่อพ้นสิบปีนับแต่วันทำละเมิด"
            ),
            section=448,
            law_type=CIVIL_CODE,
        ),
        Document(
            id="ccc-453",
            title="ซื้อขาย: ลักษณะของสัญญาซื้อขาย",
            content=(
                "อันว่าซื้อขายนั้น คือสัญญาซึ่งบุคคลฝ่ายหนึ่ง เรียกว่าผู้ขาย โอนกรรมสิทธิ์"
                "แห่งทรัพย์สินให้แก่บุคคลอีกฝ่ายหนึ่ง เรียกว่าผู้ซื้อ และผู้ซื้อตกลงว่า"
                "จะใช้ราคาทรัพย์สินนั้นให้แก่ผู้ขาย"
            ),
            section=453,
            law_type=CIVIL_CODE,
        ),
        Document(
            id="ccc-537",
            title="เช่าทรัพย์: ลักษณะของสัญญาเช่า",
            content=(
                "อันว่าเช่าทรัพย์สินนั้น คือสัญญาซึ่งบุคคลคนหนึ่ง เรียกว่าผู้ให้เช่า "
                "ตกลงให้บุคคลอีกคนหนึ่ง เรียกว่าผู้เช่า ได้ใช้หรือได้รับประโยชน์ในทรัพย์สิน"
                "อย่างใดอย่างหนึ่งชั่วระยะเวลาอันมีจำกัด และผู้เช่าตกลงจะให้ค่าเช่าเพื่อการนั้น"
            ),
            section=537,
            law_type=CIVIL_CODE,
        ),
        Document(
            id="ccc-653",
            title="ยืม: หลักฐานการกู้ยืมเงิน",
            content=(
                "การกู้ยืมเงินกว่าสองพันบาทขึ้นไปนั้น ถ้ามิได้มีหลักฐานแห่งการกู้ยืม"
                "เป็นหนังสืออย่างใดอย่างหนึ่งลงลายมือชื่อผู้ยืมเป็นสำคัญ "
                "จะฟ้องร้องให้บังคับคดีหาได้ไม่"
            ),
            section=653,
            law_type=CIVIL_CODE,
        ),
        Document(
            id="ccc-1457",
            title="ครอบครัว: การจดทะเบียนสมรส",
            content="การสมรสตามประมวลกฎหมายนี้จะมีได้เฉพาะเมื่อได้จดทะเบียนแล้วเท่านั้น",
            section=1457,
            law_type=CIVIL_CODE,
        ),
    ]


async def seed_vector_store(store, embeddings: EmbeddingProvider) -> list[Document]:
    """
    Embed the seed passages and write them into a store.

    Works with PgVectorStore or InMemoryVectorStore; both expose
    insert_documents().

    Returns:
        The documents that were written, with embeddings attached
    """
    if not hasattr(store, "insert_documents"):
        raise TypeError(
            f"Store {type(store).__name__} does not support document insertion"
        )

    docs = get_legal_documents()
    vectors = await embeddings.embed_batch([doc.embedding_text for doc in docs])
    for doc, vector in zip(docs, vectors):
        doc.embedding = vector

    await store.insert_documents(docs)
    return docs
