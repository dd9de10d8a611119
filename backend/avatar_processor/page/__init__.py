"""업로드 페이지(뷰 상태, 컨트롤러, 렌더링) 패키지입니다."""
